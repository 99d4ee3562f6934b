# app/services/tenant/slug_service.py
"""URL-safe tenant slugs for public booking pages (/book/{slug})"""
import re
import uuid
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.tenant import Tenant

MIN_LENGTH = 3
MAX_LENGTH = 30
SLUG_PATTERN = re.compile(r"^[a-z0-9-]+$")
SUFFIXES = ("auto", "motors", "garage", "service")


class SlugService:
    """Generate, validate and de-duplicate tenant slugs"""

    @staticmethod
    def generate_slug(value: str) -> str:
        """'Joe's Auto & Tire' -> 'joes-auto-tire'"""
        if not value or not value.strip():
            return f"shop-{uuid.uuid4().hex[:8]}"

        slug = value.lower()
        slug = re.sub(r"[^a-z0-9\s-]", "", slug)
        slug = re.sub(r"\s+", "-", slug)
        slug = re.sub(r"-+", "-", slug)
        slug = slug.strip("-")

        if len(slug) < MIN_LENGTH:
            slug = f"{slug}-shop".lstrip("-")

        if len(slug) > MAX_LENGTH:
            slug = slug[:MAX_LENGTH].rstrip("-")

        return slug

    @staticmethod
    def is_valid_slug(slug: Optional[str]) -> bool:
        if not slug or not slug.strip():
            return False
        if len(slug) < MIN_LENGTH or len(slug) > MAX_LENGTH:
            return False
        return SLUG_PATTERN.fullmatch(slug) is not None

    @staticmethod
    def is_slug_available(db: Session, slug: str, exclude_tenant_id: Optional[int] = None) -> bool:
        """Valid and not used by another tenant (case-insensitive)"""
        if not SlugService.is_valid_slug(slug):
            return False

        query = db.query(Tenant).filter(func.lower(Tenant.slug) == slug.lower())
        if exclude_tenant_id is not None:
            query = query.filter(Tenant.id != exclude_tenant_id)

        return query.first() is None

    @staticmethod
    def get_unique_slug(db: Session, base: str, exclude_tenant_id: Optional[int] = None) -> str:
        """Slug from base, numbered (-2 .. -100) or randomized when taken"""
        slug = SlugService.generate_slug(base)

        if SlugService.is_slug_available(db, slug, exclude_tenant_id):
            return slug

        for i in range(2, 101):
            numbered = f"{slug}-{i}"
            if len(numbered) <= MAX_LENGTH and SlugService.is_slug_available(db, numbered, exclude_tenant_id):
                return numbered

        return f"{slug[:MAX_LENGTH - 9].rstrip('-')}-{uuid.uuid4().hex[:8]}"

    @staticmethod
    def suggest_alternative_slugs(db: Session, slug: str, count: int = 3) -> List[str]:
        """Numbered variants first, then trade suffixes"""
        suggestions: List[str] = []
        base = SlugService.generate_slug(slug)

        for i in range(2, count + 2):
            candidate = f"{base}-{i}"
            if len(candidate) <= MAX_LENGTH and SlugService.is_slug_available(db, candidate):
                suggestions.append(candidate)
                if len(suggestions) >= count:
                    return suggestions

        for suffix in SUFFIXES:
            candidate = f"{base}-{suffix}"
            if len(candidate) <= MAX_LENGTH and SlugService.is_slug_available(db, candidate):
                suggestions.append(candidate)
                if len(suggestions) >= count:
                    break

        return suggestions

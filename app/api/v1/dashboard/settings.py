# ============================================================================
# FILE: app/api/v1/dashboard/settings.py
# Tenant availability settings
# ============================================================================
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_tenant
from app.config.database import get_db
from app.core.exceptions import AvailabilityRulesError
from app.models.tenant import Tenant
from app.schemas.availability import AvailabilityRules, validate_availability_rules

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/settings", tags=["dashboard-settings"])


@router.get("/availability", response_model=AvailabilityRules)
def get_availability_settings(
        tenant: Tenant = Depends(get_current_tenant)
):
    """
    Current availability rules (defaults when none are stored yet)
    """
    try:
        rules = tenant.get_availability_rules()
    except AvailabilityRulesError as e:
        logger.error(f"Tenant {tenant.slug} has unreadable availability rules: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return rules or AvailabilityRules(timezone=tenant.timezone or AvailabilityRules().timezone)


@router.put("/availability", response_model=AvailabilityRules)
def update_availability_settings(
        rules: AvailabilityRules,
        tenant: Tenant = Depends(get_current_tenant),
        db: Session = Depends(get_db)
):
    """
    Replace the availability rules; rejected as a whole on the first invalid value
    """
    try:
        validate_availability_rules(rules)
    except AvailabilityRulesError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        tenant.set_availability_rules(rules)
        tenant.timezone = rules.timezone
        db.commit()
        db.refresh(tenant)
    except Exception as e:
        logger.error(f"Error saving availability rules for tenant {tenant.slug}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Could not save availability rules")

    logger.info(f"Updated availability rules for tenant {tenant.slug}")
    return tenant.get_availability_rules()

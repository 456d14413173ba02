import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from realme.core.exceptions import AuthorizationError
from realme.flows.ai_providers.base import StructuredGenerator
from realme.flows.schemas import OrganizationInsightsOutput
from realme.flows.service import generate_organization_insights
from realme.wellness.schemas import Identity

logger = logging.getLogger(__name__)

# Member fields that identify a person and never reach a prompt
PII_FIELDS = frozenset({"name", "email", "phone", "uid", "avatar"})


def anonymize_member_data(members: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """Strip identifying fields from each member record."""
    return [{k: v for k, v in m.items() if k not in PII_FIELDS} for m in members]


def require_leader(identity: Union[Identity, Mapping[str, Any]]) -> Identity:
    """
    Ensure the identity leads an organization.

    Raises:
        AuthorizationError: If the identity is not a leader or has no organization
    """
    identity = Identity.model_validate(identity)
    if not identity.is_leader:
        raise AuthorizationError("Only organization leaders can view organization insights.")
    if not identity.organization_id:
        logger.error(f"Leader {identity.email} is missing organizationId")
        raise AuthorizationError("Your account is not linked to an organization.")
    return identity


async def organization_insights_for(
    identity: Union[Identity, Mapping[str, Any]],
    members: Iterable[Mapping[str, Any]],
    generator: Optional[StructuredGenerator] = None,
    **kwargs: Any,
) -> OrganizationInsightsOutput:
    """Authorize the leader, anonymize member records and run the insights flow."""
    leader = require_leader(identity)
    member_data = anonymize_member_data(members)
    logger.info(f"Generating insights for organization {leader.organization_id} ({len(member_data)} members)")
    return await generate_organization_insights(
        {"organization_id": leader.organization_id, "member_data": member_data},
        generator,
        **kwargs,
    )

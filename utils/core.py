import logging
from typing import Any, Dict, Optional

from utils.attio import AttioClient
from utils.config import Settings
from utils.errors import ClientPayloadError, NotFoundError
from utils.field_map import build_update_set
from utils.payload import require_questions, resolve_domain
from utils.schema import RelayResult, UpdateDetails

log = logging.getLogger(__name__)


class Relay:
    """Fillout submission -> Attio list entry update, one request at a time."""

    def __init__(self, settings: Settings, client: Optional[AttioClient] = None):
        self.settings = settings
        self.mappings = settings.mappings()
        self.client = client or AttioClient(
            api_key=settings.api_key,
            domain_attribute=settings.domain_attribute,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    def process(self, body: Any, dry_run: bool = False) -> Dict[str, Any]:
        s = self.settings
        questions = require_questions(body)
        domain = resolve_domain(questions, s.domain_field_id)
        log.info("Webhook received for domain: %s", domain)

        # 1) company by domain
        log.info("Searching company with domain: %s", domain)
        company_id = self.client.find_company_by_domain(domain)
        if not company_id:
            log.info("Company not found for domain %s", domain)
            raise NotFoundError(
                "Company not found",
                f"No company found with domain: {domain}",
            )
        log.info("Company found - id: %s", company_id)

        # 2) list entry whose parent record is that company
        log.info("Searching entry in list %s for company %s", s.list_id, company_id)
        entry_id = self.client.find_list_entry(s.list_id, company_id)
        if not entry_id:
            log.info("No list entry for company %s", company_id)
            raise NotFoundError(
                "List entry not found",
                f"No list entry found for the company with domain: {domain}",
                company_id=company_id,
                hint="Check that your list has an entry linked to this company",
            )
        log.info("Entry found - id: %s", entry_id)

        # 3) answers -> attribute values
        values = build_update_set(questions, self.mappings, s.domain_field_id)
        if not values:
            log.info("No fields to update")
            raise ClientPayloadError(
                "No fields to update",
                "No fields to update were found in the form submission",
                received_fields=[q.summary(with_value=True) for q in questions],
            )

        # 4) patch
        if dry_run:
            log.info("Dry run: skipping update of %d fields", len(values))
        else:
            log.info("Updating entry with %d fields", len(values))
            self.client.update_entry(s.list_id, entry_id, values)
            log.info("Entry updated")

        result = RelayResult(
            message=f"Entry updated for domain: {domain}",
            details=UpdateDetails(
                companyId=company_id,
                entryId=entry_id,
                updatedFields=list(values.keys()),
                values=values,
                dryRun=True if dry_run else None,
            ),
        )
        # exclude only the flag; answer values may legitimately hold nulls
        return result.model_dump(exclude=None if dry_run else {"details": {"dryRun"}})

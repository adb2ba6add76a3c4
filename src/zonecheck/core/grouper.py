"""Partition declared records into the groups that get compared as sets."""

import logging
from typing import Iterable

from zonecheck.core.models import Domain, ExpectedRecord, RecordGroup

logger = logging.getLogger(__name__)


def absolutize(domain: str, name: str) -> str:
    """Turn a record name relative to ``domain`` into an absolute one."""
    if name == "@":
        return domain
    return f"{name}.{domain}"


def group_records(domain: str, records: Iterable[ExpectedRecord]) -> list[RecordGroup]:
    """Group ``records`` by (absolute name, record type).

    Groups come back in first-seen order; members keep their input order.
    An empty input gives no groups.
    """
    buckets: dict[tuple[str, str], list[ExpectedRecord]] = {}
    for record in records:
        key = (absolutize(domain, record.name), record.record_type)
        buckets.setdefault(key, []).append(record)

    groups = []
    for (name, record_type), members in buckets.items():
        ceilings = {r.ttl for r in members}
        if len(ceilings) > 1:
            logger.warning(
                f"{record_type} {name}: divergent TTLs {sorted(ceilings)}, "
                f"using {members[0].ttl} from the first record"
            )
        groups.append(
            RecordGroup(
                domain=domain,
                name=name,
                record_type=record_type,
                records=tuple(members),
            )
        )
    return groups


def group_domains(domains: Iterable[Domain]) -> list[RecordGroup]:
    """Group every domain's records, concatenating the results."""
    groups: list[RecordGroup] = []
    for domain in domains:
        domain_groups = group_records(domain.name, domain.records)
        logger.debug(
            f"{domain.name}: {len(domain.records)} records in {len(domain_groups)} groups"
        )
        groups.extend(domain_groups)
    return groups

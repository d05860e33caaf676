# Biological inflammation grouping matcher - per-scan-type aggregates and report display set
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, List, Optional

from models import (
    InflammationGrouping,
    MatchedGroupings,
    ScanReport,
    ScanTypeAggregate,
    inflammation_groupings,
)


def get_grouping_catalog() -> List[InflammationGrouping]:
    """Read the grouping catalog. Both grouping traversals go through here."""
    return list(inflammation_groupings)


def grouping_matches(grouping: InflammationGrouping, condition_names: Iterable[Optional[str]]) -> bool:
    """Every inflammation of the grouping is present; extra conditions are fine."""
    present = set(condition_names)
    return all(name in present for name in grouping.inflammations)


def find_first_matching_grouping(
    scan: ScanReport,
    catalog: List[InflammationGrouping],
) -> Optional[InflammationGrouping]:
    """
    First grouping in catalog order matched by the scan.
    Only one grouping is ever credited to a scan's aggregate, even when several match.
    """
    names = scan.condition_names()
    for grouping in catalog:
        if grouping_matches(grouping, names):
            return grouping
    return None


def _round_one_decimal(value: float) -> float:
    """Round half-up to one decimal place (2.25 -> 2.3)"""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _percentage_value(percentage: Optional[str]) -> float:
    if not percentage:
        return 0.0
    try:
        value = Decimal(percentage.replace("%", "").strip())
    except InvalidOperation:
        return 0.0
    return float(value) if value.is_finite() else 0.0


def compute_scan_type_aggregate(
    scan: ScanReport,
    catalog: List[InflammationGrouping],
) -> Optional[ScanTypeAggregate]:
    """
    Average scale and percentage over all conditions of a scan that matches
    a grouping. Missing values count as 0. None when nothing matches.
    """
    if find_first_matching_grouping(scan, catalog) is None:
        return None

    count = len(scan.report)
    if count == 0:
        return ScanTypeAggregate(scanType=scan.scanType, avgScale=0.0, avgPercentage=0.0)

    total_scale = sum(condition.scale or 0 for condition in scan.report)
    total_percentage = sum(_percentage_value(condition.percentage) for condition in scan.report)
    return ScanTypeAggregate(
        scanType=scan.scanType,
        avgScale=_round_one_decimal(total_scale / count),
        avgPercentage=_round_one_decimal(total_percentage / count),
    )


def compute_scan_type_aggregates(
    scans: List[ScanReport],
    catalog: List[InflammationGrouping],
) -> List[ScanTypeAggregate]:
    """Aggregates for every matched scan, ordered by scan type"""
    aggregates = []
    for scan in scans:
        aggregate = compute_scan_type_aggregate(scan, catalog)
        if aggregate is not None:
            aggregates.append(aggregate)
    return sorted(aggregates, key=lambda a: a.scanType)


def collect_matched_groupings(
    scans: List[ScanReport],
    catalog: List[InflammationGrouping],
) -> MatchedGroupings:
    """
    All groupings matched by any scan, with the union of their inflammations.
    Unlike the aggregates, every matching grouping counts here.
    """
    group_names: List[str] = []
    matched_inflammations: List[str] = []

    for scan in scans:
        names = scan.condition_names()
        for grouping in catalog:
            if not grouping_matches(grouping, names):
                continue
            if grouping.groupName not in group_names:
                group_names.append(grouping.groupName)
            for inflammation in grouping.inflammations:
                if inflammation not in matched_inflammations:
                    matched_inflammations.append(inflammation)

    return MatchedGroupings(groupNames=group_names, inflammations=matched_inflammations)

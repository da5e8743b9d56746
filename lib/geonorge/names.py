"""
Preferred place name resolution, dood!

A place may have several recorded spellings. The display name is chosen from
primary names only: first an approved-and-prioritized one, then an adopted one.
"""

from typing import Optional, Sequence

from .models import ApprovalStatus, NameStatus, NameVariant, SsrName

UNKNOWN_NAME = "Ukjent"


def _findPrimary(variants: Sequence[NameVariant], approvalStatus: ApprovalStatus) -> Optional[NameVariant]:
    for variant in variants:
        if variant.text is None:
            continue
        if variant.nameStatus == NameStatus.PRIMARY and variant.approvalStatus == approvalStatus:
            return variant
    return None


def getPreferredName(variants: Sequence[NameVariant]) -> Optional[str]:
    """Pick canonical display name from recorded name variants.

    Args:
        variants: Name variants in upstream order

    Returns:
        Text of the single variant if there is only one (status is not checked),
        otherwise the first primary approved-and-prioritized name, then the first
        primary adopted name, or UNKNOWN_NAME if none qualifies. A single variant
        without recorded spelling gives None.
    """
    if len(variants) == 1:
        return variants[0].text

    preferred = _findPrimary(variants, ApprovalStatus.APPROVED_AND_PRIORITIZED) or _findPrimary(
        variants, ApprovalStatus.ADOPTED
    )
    if preferred is None:
        return UNKNOWN_NAME
    return preferred.text


def parseNameVariant(raw: SsrName) -> NameVariant:
    """Convert raw `stedsnavn` entry into NameVariant, missing spelling stays absent"""
    return NameVariant(
        text=raw.get("skrivemåte") or None,
        languageTag=raw.get("språk", ""),
        approvalStatus=ApprovalStatus.fromRaw(raw.get("skrivemåtestatus")),
        nameStatus=NameStatus.fromRaw(raw.get("navnestatus")),
    )

from typing import Any, Dict, List, Optional, Sequence

from quote_api.models.quote import PricingOption


DEFAULT_PRICING_OPTIONS: List[PricingOption] = [PricingOption.ANNUAL]


def normalize_pricing_options(
    pricing_options: Optional[Sequence[Any]],
    legacy_option: Optional[Any] = None,
    *,
    default: Optional[List[PricingOption]] = None,
) -> List[PricingOption]:
    """
    Canonical ``pricingOptions`` list from either the array field or the
    deprecated single ``pricingOption`` field.

    An explicit empty array is returned as-is so the caller can reject it.
    """
    if pricing_options is not None:
        return [PricingOption(o) for o in pricing_options]
    if legacy_option:
        return [PricingOption(legacy_option)]
    return list(default if default is not None else DEFAULT_PRICING_OPTIONS)


def upgrade_quote_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Rewrite a stored quote that still carries ``pricingOption``."""
    if "pricingOption" not in doc and doc.get("pricingOptions"):
        return doc
    upgraded = dict(doc)
    legacy = upgraded.pop("pricingOption", None)
    options = upgraded.get("pricingOptions") or None
    upgraded["pricingOptions"] = [
        o.value for o in normalize_pricing_options(options, legacy)
    ]
    return upgraded

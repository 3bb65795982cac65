from quote_api.domain.legacy import normalize_pricing_options, upgrade_quote_document
from quote_api.models.quote import PricingOption


def test_array_field_wins_over_legacy_field():
    assert normalize_pricing_options(["Upfront", "Annual"], "Quarterly") == [
        PricingOption.UPFRONT,
        PricingOption.ANNUAL,
    ]


def test_legacy_single_option():
    assert normalize_pricing_options(None, "Quarterly") == [PricingOption.QUARTERLY]


def test_default_when_nothing_given():
    assert normalize_pricing_options(None) == [PricingOption.ANNUAL]
    assert normalize_pricing_options(None, default=[PricingOption.UPFRONT]) == [PricingOption.UPFRONT]


def test_explicit_empty_list_is_kept():
    assert normalize_pricing_options([]) == []


def test_upgrade_rewrites_stored_single_option():
    doc = {"id": "quote-1", "pricingOption": "Financed Monthly"}

    upgraded = upgrade_quote_document(doc)

    assert upgraded["pricingOptions"] == ["Financed Monthly"]
    assert "pricingOption" not in upgraded
    assert doc == {"id": "quote-1", "pricingOption": "Financed Monthly"}


def test_upgrade_leaves_current_documents_alone():
    doc = {"id": "quote-1", "pricingOptions": ["Annual", "Upfront"]}

    assert upgrade_quote_document(doc) is doc

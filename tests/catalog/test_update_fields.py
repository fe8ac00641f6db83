"""Tests for single-field update parsing."""

from decimal import Decimal

import pytest

from catalog_host.catalog.models import CatalogItem
from catalog_host.catalog.update_fields import UpdateField, check_invariant, parse_update
from catalog_host.domain.result import FailureReason, Found, NotFound


class TestUpdateFieldResolve:
    """Tests for property name resolution."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Name", UpdateField.NAME),
            ("name", UpdateField.NAME),
            ("AvailableStock", UpdateField.AVAILABLE_STOCK),
            ("availableStock", UpdateField.AVAILABLE_STOCK),
            ("available_stock", UpdateField.AVAILABLE_STOCK),
            ("CatalogBrandId", UpdateField.CATALOG_BRAND_ID),
            ("PictureFileName", UpdateField.PICTURE_FILE_NAME),
            (" Price ", UpdateField.PRICE),
        ],
    )
    def test_known_names(self, name: str, expected: UpdateField) -> None:
        assert UpdateField.resolve(name) is expected

    @pytest.mark.parametrize("name", ["Id", "CatalogBrand", "PictureUrl", "", "price_"])
    def test_unknown_names(self, name: str) -> None:
        """Identity, relationships and computed fields are not updatable."""
        assert UpdateField.resolve(name) is None

    def test_reference_fields(self) -> None:
        assert UpdateField.CATALOG_BRAND_ID.is_reference
        assert UpdateField.CATALOG_TYPE_ID.is_reference
        assert not UpdateField.PRICE.is_reference


class TestParseUpdate:
    """Tests for value coercion."""

    def test_price_is_decimal(self) -> None:
        result = parse_update("Price", "12.50")

        assert isinstance(result, Found)
        assert result.value.value == Decimal("12.50")

    def test_stock_is_int(self) -> None:
        result = parse_update("AvailableStock", " 42 ")

        assert result.value.value == 42

    def test_description_may_be_empty(self) -> None:
        result = parse_update("Description", "")

        assert isinstance(result, Found)
        assert result.value.value == ""

    def test_unknown_property(self) -> None:
        result = parse_update("Colour", "red")

        assert isinstance(result, NotFound)
        assert result.reason is FailureReason.INVALID_PROPERTY

    @pytest.mark.parametrize(
        "name,value",
        [
            ("Price", "NaN"),
            ("Price", "Infinity"),
            ("Price", "-0.01"),
            ("AvailableStock", "-1"),
            ("AvailableStock", "ten"),
            ("CatalogTypeId", "x"),
            ("Name", ""),
        ],
    )
    def test_rejected_values(self, name: str, value: str) -> None:
        result = parse_update(name, value)

        assert isinstance(result, NotFound)
        assert result.reason is FailureReason.INVALID_VALUE

    def test_apply_sets_only_target_field(self) -> None:
        item = CatalogItem(name="Old", description="Keep", available_stock=3)

        parse_update("Name", "New").value.apply(item)

        assert item.name == "New"
        assert item.description == "Keep"
        assert item.available_stock == 3


class TestColumnLimits:
    """Tests for values at the edges of what the columns can hold."""

    @pytest.mark.parametrize(
        "name,value",
        [
            ("Price", "1.239"),
            ("Price", "0.001"),
            ("Price", "100000000"),
            ("Price", "1E+9"),
            ("AvailableStock", "2147483648"),
            ("AvailableStock", "99999999999999999999"),
            ("CatalogBrandId", "99999999999999999999"),
            ("CatalogTypeId", "-2147483649"),
            ("Name", "x" * 201),
            ("PictureFileName", "p" * 256),
        ],
    )
    def test_values_past_column_limits_rejected(self, name: str, value: str) -> None:
        result = parse_update(name, value)

        assert isinstance(result, NotFound)
        assert result.reason is FailureReason.INVALID_VALUE

    @pytest.mark.parametrize(
        "name,value",
        [
            ("Price", "99999999.99"),
            ("Price", "1.230"),
            ("Price", "0"),
            ("AvailableStock", "2147483647"),
            ("Name", "x" * 200),
            ("PictureFileName", "p" * 255),
        ],
    )
    def test_values_at_column_limits_accepted(self, name: str, value: str) -> None:
        assert isinstance(parse_update(name, value), Found)

    @pytest.mark.parametrize("price", [Decimal("NaN"), Decimal("sNaN"), Decimal("-Infinity")])
    def test_non_finite_price_reported_not_raised(self, price: Decimal) -> None:
        assert check_invariant(UpdateField.PRICE, price) is not None

    def test_price_must_be_decimal(self) -> None:
        assert check_invariant(UpdateField.PRICE, 1.5) is not None

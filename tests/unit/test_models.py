"""Tests for sitemock.core.models — form validation and result envelopes.

Tests cover:
- camelCase aliases and lenient validation on FormData.
- Rejection of forms without a usable activityName.
- Status codes and JSON envelopes of the three outcomes.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sitemock.core.models import Failure, Fallback, FormData, Success


class TestFormData:
    """Test the FormData Pydantic model."""

    def test_aliases(self, form_data):
        """camelCase keys populate snake_case attributes."""
        form = FormData.model_validate(form_data)

        assert form.activity_name == "Bloom & Co Florist"
        assert form.what_i_do == "Hand-tied bouquets and event flowers"
        assert form.has_logo is True
        assert [item.name for item in form.items] == ["Bouquets", "", "Weddings"]

    def test_activity_name_required(self):
        """activityName labels the placeholder and must be present."""
        with pytest.raises(ValidationError):
            FormData.model_validate({"whatIDo": "Things"})

    def test_activity_name_must_be_text(self):
        """A non-string activityName is rejected."""
        with pytest.raises(ValidationError):
            FormData.model_validate({"activityName": 42})

    def test_colors_accept_anything(self):
        """Malformed colours are left for normalisation to handle."""
        form = FormData.model_validate(
            {"activityName": "x", "color1": 12, "color2": ["#fff"], "color3": {"a": 1}}
        )
        assert form.color1 == 12

    def test_unknown_fields_ignored(self):
        """Extra keys from newer form versions do not break validation."""
        form = FormData.model_validate({"activityName": "x", "newField": "y"})
        assert form.activity_name == "x"

    def test_items_must_be_a_list(self):
        """A non-list items value is malformed input."""
        with pytest.raises(ValidationError):
            FormData.model_validate({"activityName": "x", "items": "Bouquets"})

    def test_frozen(self):
        """The form is immutable for the duration of a request."""
        form = FormData(activityName="x")
        with pytest.raises(ValidationError):
            form.activity_name = "y"


class TestResultEnvelopes:
    """Test the three terminal outcomes."""

    def test_success(self):
        result = Success(image_url="data:image/png;base64,AAAA")
        assert result.status_code == 200
        assert result.to_envelope() == {"success": True, "imageUrl": "data:image/png;base64,AAAA"}

    def test_fallback(self):
        result = Fallback(image_url="https://via.placeholder.com/x", reason="Using placeholder")
        assert result.status_code == 200
        assert result.to_envelope() == {
            "success": True,
            "imageUrl": "https://via.placeholder.com/x",
            "fallback": True,
            "message": "Using placeholder",
        }

    def test_failure(self):
        result = Failure(error_message="Invalid formData fields: activityName")
        assert result.status_code == 500
        assert result.to_envelope() == {
            "success": False,
            "error": "Invalid formData fields: activityName",
            "fallback": True,
        }

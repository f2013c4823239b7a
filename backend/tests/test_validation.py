"""
Petora Backend - Document Validation Unit Tests
================================================

Test Strategy:
    ✅ Defaults applied (gender, size, status, role)
    ✅ Missing required fields and enum mismatches reported per field
    ✅ Empty strings count as missing for required fields
    ✅ Malformed references rejected, unknown fields ignored
"""

import pytest
from bson import ObjectId

from petora.exceptions import ValidationError
from petora.models import ApplicationDocument, PetDocument, ShelterDocument, UserDocument
from petora.validation import require_valid, validate_document

PET = {
    "name": "Rex",
    "species": "Dog",
    "description": "Friendly",
    "imageUrl": "uploads/image-1.jpg",
}


class TestValidateDocument:
    def test_pet_defaults(self):
        result = validate_document(PetDocument, PET)

        assert result.ok
        document = result.value.to_document()
        assert document["gender"] == "Unknown"
        assert document["size"] == "Medium"
        assert document["status"] == "Available"
        assert document["shelterId"] is None

    def test_missing_fields_reported(self):
        result = validate_document(PetDocument, {"name": "Rex"})

        assert not result.ok
        fields = {v.field for v in result.violations}
        assert {"species", "description", "imageUrl"} <= fields

    def test_enum_mismatch(self):
        result = validate_document(PetDocument, {**PET, "size": "Huge"})

        assert [v.field for v in result.violations] == ["size"]

    def test_status_values_are_case_sensitive(self):
        assert not validate_document(PetDocument, {**PET, "status": "adopted"}).ok
        assert validate_document(PetDocument, {**PET, "status": "Adopted"}).ok

    def test_empty_string_is_missing(self):
        result = validate_document(ShelterDocument, {"name": "", "location": "Here"})

        assert result.violations[0].field == "name"

    def test_numeric_age_from_form_string(self):
        result = validate_document(PetDocument, {**PET, "age": "3"})
        assert result.value.age == 3

    def test_reference_coerced_to_object_id(self):
        shelter_id = ObjectId()
        result = validate_document(PetDocument, {**PET, "shelterId": str(shelter_id)})

        assert result.value.to_document()["shelterId"] == shelter_id

    def test_expanded_reference_collapses_to_its_id(self):
        shelter_id = ObjectId()
        expanded = {"_id": str(shelter_id), "name": "Happy Tails", "location": "Springfield"}

        result = validate_document(PetDocument, {**PET, "shelterId": expanded})

        assert result.value.to_document()["shelterId"] == shelter_id

    def test_expanded_reference_with_bad_id_rejected(self):
        result = validate_document(PetDocument, {**PET, "shelterId": {"_id": "nope"}})
        assert [v.field for v in result.violations] == ["shelterId"]

    def test_malformed_reference_rejected(self):
        result = validate_document(ApplicationDocument, {
            "applicantName": "Ann",
            "applicantEmail": "ann@example.com",
            "applicantPhone": "555-0100",
            "petId": "not-an-id",
        })
        assert [v.field for v in result.violations] == ["petId"]

    def test_unknown_fields_ignored(self):
        result = validate_document(ShelterDocument, {"name": "A", "location": "B", "rating": 5})
        assert "rating" not in result.value.to_document()

    def test_user_role_default_and_enum(self):
        user = {"email": "a@b.c", "password": "pw", "shelterRef": str(ObjectId())}

        assert validate_document(UserDocument, user).value.to_document()["role"] == "shelter-admin"
        assert not validate_document(UserDocument, {**user, "role": "adopter"}).ok


class TestRequireValid:
    def test_returns_model(self):
        assert require_valid(PetDocument, PET).name == "Rex"

    def test_raises_with_violations(self):
        with pytest.raises(ValidationError, match="Pet validation failed") as exc_info:
            require_valid(PetDocument, {**PET, "gender": "Other"})

        assert [v["field"] for v in exc_info.value.violations] == ["gender"]
        assert exc_info.value.context["violations"] == exc_info.value.violations

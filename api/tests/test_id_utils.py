import uuid

import pytest

from app.core.exceptions import ValidationError
from app.repositories.topic_repository import TopicRepository
from app.utils.id_utils import convert_id_to_string, convert_string_to_id, is_valid_id


class TestIdConversion:

    def test_string_round_trip(self):
        value = str(uuid.uuid4())
        assert convert_id_to_string(convert_string_to_id(value)) == value

    def test_id_round_trip(self):
        value = uuid.uuid4()
        assert convert_string_to_id(convert_id_to_string(value)) == value

    def test_repository_exposes_conversions(self):
        value = uuid.uuid4()
        assert TopicRepository.convert_string_to_id(TopicRepository.convert_id_to_string(value)) == value

    @pytest.mark.parametrize("value", ["", "not-an-id", "12345", None])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            convert_string_to_id(value)

    def test_rejects_non_canonical_form(self):
        # Uppercase would not round-trip to the same string
        value = str(uuid.uuid4()).upper()
        with pytest.raises(ValidationError):
            convert_string_to_id(value)
        assert not is_valid_id(value)

    def test_is_valid_id(self):
        assert is_valid_id(str(uuid.uuid4()))
        assert not is_valid_id("topic-1")

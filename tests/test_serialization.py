"""
Tests for fusion law records and JSON
"""

import json
from fractions import Fraction

import pytest

from fusion_law import (
    FusionLaw,
    SerializationError,
    coproduct,
    dumps,
    from_dict,
    jordan_fusion_law,
    load,
    loads,
    save,
    to_dict,
)


class TestRecords:
    def test_jordan_record(self, jordan):
        assert to_dict(jordan) == {
            "class": "Fusion law",
            "name": "Jordan",
            "directory": "Jordan_eta",
            "set": [1, 2, 3],
            "law": [[[1], [], [3]], [[], [2], [3]], [[3], [3], [1, 2]]],
            "evaluation": [1, 0, "eta"],
        }

    def test_unnamed_record(self, klein):
        record = to_dict(FusionLaw(klein.labels, [[[]] * 4] * 4))
        assert "name" not in record
        assert "evaluation" not in record

    def test_from_dict(self, monster):
        law = from_dict(to_dict(monster))
        assert law == monster
        assert law.name == "Monster"
        assert law.directory == "Monster_al_bt"

    def test_wrong_class(self, jordan):
        record = to_dict(jordan)
        record["class"] = "Axial algebra"
        with pytest.raises(SerializationError):
            from_dict(record)
        with pytest.raises(SerializationError):
            from_dict([1, 2, 3])

    def test_missing_field(self, jordan):
        record = to_dict(jordan)
        del record["law"]
        with pytest.raises(SerializationError):
            from_dict(record)

    def test_bad_evaluation_length(self, jordan):
        record = to_dict(jordan)
        record["evaluation"] = [1, 0]
        with pytest.raises(SerializationError):
            from_dict(record)

    def test_bad_table(self, jordan):
        record = to_dict(jordan)
        record["law"][0][0] = [9]
        with pytest.raises(SerializationError):
            from_dict(record)

    @pytest.mark.parametrize("field, value", [
        ("set", 5),
        ("law", 5),
        ("law", [5, 6, 7]),
        ("set", [{"a": 1}, 2, 3]),
        ("evaluation", 3),
    ])
    def test_malformed_fields(self, jordan, field, value):
        record = to_dict(jordan)
        record[field] = value
        with pytest.raises(SerializationError):
            from_dict(record)


class TestJson:
    def test_round_trip(self, monster):
        text = dumps(monster)
        assert json.loads(text)["set"] == [1, 2, 3, 4]
        assert loads(text) == monster

    def test_tuple_labels(self, jordan, associative):
        law = coproduct(jordan, associative)
        restored = loads(dumps(law))
        assert restored.labels == law.labels
        assert restored == law

    def test_not_json(self):
        with pytest.raises(SerializationError):
            loads("{not json")

    def test_unserialisable_evaluation(self):
        with pytest.raises(SerializationError):
            dumps(jordan_fusion_law(Fraction(1, 4)))

    def test_files(self, tmp_path, monster):
        path = save(monster, tmp_path / "Monster_al_bt.json")
        assert path.exists()
        assert load(path) == monster
        assert load(str(path)).name == "Monster"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

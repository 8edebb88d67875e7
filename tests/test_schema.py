import pytest

from swasthya.models import DiagnosisList, SymptomList
from swasthya.pipeline.schema import SchemaMismatch, parse_structured_result


def test_medicines_shape_wins_when_present():
    result = parse_structured_result(
        {
            "medicines": [{"name": "Pulsatilla", "keySymptoms": "weepy, thirstless"}],
            "medicineName": "ignored",
            "symptoms": ["ignored"],
        }
    )

    assert isinstance(result, DiagnosisList)
    assert result.medicines[0].key_symptoms == "weepy, thirstless"
    assert result.to_dict() == {"medicines": [{"name": "Pulsatilla", "symptoms": "weepy, thirstless"}]}


def test_lookup_shape():
    result = parse_structured_result({"medicineName": "Nux Vomica", "symptoms": ["indigestion", "irritability"]})

    assert result == SymptomList(subject_name="Nux Vomica", symptoms=("indigestion", "irritability"))


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "Arnica",
        {},
        {"symptoms": ["a"]},
        {"medicineName": "Arnica"},
        {"medicines": "Arnica"},
        {"medicines": [{"name": "Arnica"}]},
        {"medicines": [{"symptoms": "bruising"}]},
        {"medicines": ["Arnica"]},
        {"medicineName": "Arnica", "symptoms": "bruising"},
        {"medicineName": "Arnica", "symptoms": [1, 2]},
    ],
)
def test_invalid_shapes_are_rejected(payload):
    with pytest.raises(SchemaMismatch):
        parse_structured_result(payload)

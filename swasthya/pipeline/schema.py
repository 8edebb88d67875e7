from typing import Any, List, Optional

from swasthya.models import (
    DiagnosisList,
    MedicineSuggestion,
    StructuredResult,
    SymptomList,
)


class SchemaMismatch(ValueError):
    pass


def _optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _parse_medicine(item: Any) -> MedicineSuggestion:
    if not isinstance(item, dict):
        raise SchemaMismatch("medicine_not_object")

    name = item.get("name")
    key_symptoms = item.get("symptoms", item.get("keySymptoms"))

    if not isinstance(name, str) or not isinstance(key_symptoms, str):
        raise SchemaMismatch("medicine_missing_fields")

    return MedicineSuggestion(
        name=name,
        key_symptoms=key_symptoms,
        potency=_optional_text(item.get("potency")),
        dosage=_optional_text(item.get("dosage")),
    )


def parse_structured_result(parsed: Any) -> StructuredResult:
    """
    Map decoded JSON onto exactly one result variant.

    Whichever shape is present wins:
    - "medicines": list of {name, symptoms}   -> DiagnosisList
    - "medicineName" + "symptoms": list[str]  -> SymptomList
    Anything else raises SchemaMismatch.
    """
    if not isinstance(parsed, dict):
        raise SchemaMismatch("not_an_object")

    if "medicines" in parsed:
        medicines = parsed["medicines"]
        if not isinstance(medicines, list):
            raise SchemaMismatch("medicines_not_list")
        return DiagnosisList(medicines=tuple(_parse_medicine(m) for m in medicines))

    if "medicineName" in parsed and "symptoms" in parsed:
        subject_name = parsed["medicineName"]
        symptoms = parsed["symptoms"]
        if not isinstance(subject_name, str) or not isinstance(symptoms, list):
            raise SchemaMismatch("lookup_invalid_fields")

        texts: List[str] = []
        for s in symptoms:
            if not isinstance(s, str):
                raise SchemaMismatch("symptom_not_string")
            texts.append(s)

        return SymptomList(subject_name=subject_name, symptoms=tuple(texts))

    raise SchemaMismatch("unknown_shape")

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class Mode(str, Enum):
    DIAGNOSIS = "diagnosis"
    MEDICINE_LOOKUP = "medicine_lookup"


class Locale(str, Enum):
    HINDI = "hi-IN"
    ENGLISH = "en-US"

    @property
    def language_name(self) -> str:
        return "Hindi" if self is Locale.HINDI else "English"

    def toggled(self) -> "Locale":
        return Locale.ENGLISH if self is Locale.HINDI else Locale.HINDI


@dataclass(frozen=True)
class MedicineSuggestion:
    name: str
    key_symptoms: str
    potency: Optional[str] = None
    dosage: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"name": self.name, "symptoms": self.key_symptoms}
        if self.potency is not None:
            out["potency"] = self.potency
        if self.dosage is not None:
            out["dosage"] = self.dosage
        return out


@dataclass(frozen=True)
class DiagnosisList:
    medicines: Tuple[MedicineSuggestion, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"medicines": [m.to_dict() for m in self.medicines]}


@dataclass(frozen=True)
class SymptomList:
    subject_name: str
    symptoms: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"medicineName": self.subject_name, "symptoms": list(self.symptoms)}


StructuredResult = Union[DiagnosisList, SymptomList]

from swasthya.models import Locale, Mode

DIAGNOSIS_FORMAT = (
    '{ "medicines": [{ "name": "string", "symptoms": "string", '
    '"potency": "string", "dosage": "string" }] }'
)
LOOKUP_FORMAT = '{ "medicineName": "string", "symptoms": ["string", "string"] }'


def build_system_instruction(mode: Mode, locale: Locale) -> str:
    """
    Deterministic system instruction for one (mode, locale) pair.
    """
    language = Locale(locale).language_name

    base = f"""
You are an expert Homeopathy assistant for a doctor.

RULES:
1. Respond ONLY in {language}.
2. The user's query may be in a different language; your response MUST still be in {language}.
3. Your entire output MUST be a single, valid JSON object.
4. The JSON must NOT be inside markdown fences (```).
5. Do NOT include any comments, explanations, or introductory text.
6. Ensure all string values inside the JSON are properly escaped (use \\" for quotes within strings).
7. Do NOT use trailing commas.
8. The response must start with {{ and end with }}.
""".strip()

    if Mode(mode) is Mode.DIAGNOSIS:
        task = """
TASK:
The user will describe symptoms. Identify the 3-5 most relevant homeopathic medicines.
For each medicine, provide its name, the key matching symptoms, and suggested potency and dosage.
If potency or dosage is not applicable, omit that field from the object.
""".strip()
        shape = DIAGNOSIS_FORMAT
    else:
        task = """
TASK:
The user will name a medicine. List the top 5-7 key symptoms it is used for.
""".strip()
        shape = LOOKUP_FORMAT

    return f"{base}\n\n{task}\n\nJSON FORMAT:\n{shape}"

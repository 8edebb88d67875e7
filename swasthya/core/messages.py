from typing import Dict

from swasthya.models import Locale

MESSAGES: Dict[str, Dict[Locale, str]] = {
    "config_missing": {
        Locale.HINDI: "सर्वर पर AI क्रेडेंशियल कॉन्फ़िगर नहीं है।",
        Locale.ENGLISH: "The AI credential is not configured on the server.",
    },
    "invalid_response": {
        Locale.HINDI: "AI से प्राप्त उत्तर मान्य नहीं है। कृपया पुनः प्रयास करें।",
        Locale.ENGLISH: "The AI returned a response that could not be understood. Please try again.",
    },
    "upstream_failed": {
        Locale.HINDI: "AI से उत्तर प्राप्त करने में विफल।",
        Locale.ENGLISH: "Failed to get a response from the AI.",
    },
    "retries_exhausted": {
        Locale.HINDI: "कई प्रयासों के बाद भी AI से उत्तर प्राप्त करने में विफल।",
        Locale.ENGLISH: "Failed to get a response from the AI after multiple retries.",
    },
    "voice_error": {
        Locale.HINDI: "आवाज़ पहचान में त्रुटि: {code}",
        Locale.ENGLISH: "Voice recognition error: {code}",
    },
    "voice_start_failed": {
        Locale.HINDI: "आवाज़ पहचान शुरू नहीं हो सकी। हो सकता है यह पहले से सक्रिय हो।",
        Locale.ENGLISH: "Could not start voice recognition. It may already be active.",
    },
    "voice_error_prefix": {
        Locale.HINDI: "आवाज़ त्रुटि: {message}",
        Locale.ENGLISH: "Voice Error: {message}",
    },
}


def message(key: str, locale: Locale, **kwargs) -> str:
    return MESSAGES[key][Locale(locale)].format(**kwargs)

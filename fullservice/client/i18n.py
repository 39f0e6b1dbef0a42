from typing import Literal

from fullservice.client.store import LocalStore

Language = Literal["en", "mm"]

DEFAULT_LANGUAGE: Language = "en"
LANGUAGE_KEY = "preferred_language"

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        # Authentication
        "signUp": "Sign Up",
        "signIn": "Sign In",
        "login": "Login",
        "logout": "Logout",
        "name": "Name",
        "username": "Username",
        "email": "Email",
        "password": "Password",
        "createAccount": "Create Account",
        "alreadyHaveAccount": "Already have an account?",
        "dontHaveAccount": "Don't have an account?",
        # Navigation
        "home": "Home",
        "products": "Products",
        "news": "News",
        "history": "History",
        "profile": "My Profile",
        "manage": "Manage",
        # Messages
        "welcome": "Welcome to Online Full Service",
        "gpsRequired": "GPS Permission Required",
        "gpsMessage": "Please enable GPS location to use this application",
        "enableGPS": "Enable GPS",
        "loading": "Loading...",
        "noResults": "No results found",
        "loadFailed": "Failed to load, please try again",
        "success": "Success",
        "error": "Error",
        # Validation
        "usernameExists": "Username already exists",
        "emailExists": "Email already exists",
        "invalidCredentials": "Invalid email or password",
        "fillAllFields": "Please fill all fields",
        "missingProof": "Please upload your payment proof",
        "forbidden": "You are not allowed to do this",
    },
    "mm": {
        "signUp": "အကောင့်ဖွင့်ရန်",
        "signIn": "အကောင့်ဝင်ရန်",
        "login": "လော့ဂ်အင်",
        "logout": "ထွက်ရန်",
        "name": "နာမည်",
        "username": "အသုံးပြုသူအမည်",
        "email": "အီးမေးလ်",
        "password": "စကားဝှက်",
        "createAccount": "အကောင့်ဖန်တီးရန်",
        "alreadyHaveAccount": "အကောင့်ရှိပြီးသားလား?",
        "dontHaveAccount": "အကောင့်မရှိသေးလား?",
        "home": "ပင်မစာမျက်နှာ",
        "products": "ကုန်ပစ္စည်းများ",
        "news": "သတင်းများ",
        "history": "မှတ်တမ်း",
        "profile": "ကျွန်ုပ်၏ပရိုဖိုင်",
        "welcome": "Online Full Service မှကြိုဆိုပါတယ်",
        "gpsRequired": "GPS ခွင့်ပြုချက်လိုအပ်သည်",
        "gpsMessage": "ဤအက်ပ်ကိုအသုံးပြုရန် GPS တည်နေရာကိုဖွင့်ပေးပါ",
        "enableGPS": "GPS ဖွင့်ရန်",
        "loading": "ဖွင့်နေသည်...",
        "success": "အောင်မြင်သည်",
        "error": "အမှား",
        "usernameExists": "အသုံးပြုသူအမည်ရှိပြီးသားဖြစ်သည်",
        "emailExists": "အီးမေးလ်ရှိပြီးသားဖြစ်သည်",
        "invalidCredentials": "အီးမေးလ် သို့မဟုတ် စကားဝှက်မမှန်ကန်ပါ",
        "fillAllFields": "အကွက်များအားလုံးကိုဖြည့်ပေးပါ",
    },
}

# error code -> message key, for inline form messages
ERROR_MESSAGE_KEYS = {
    "validation_error": "fillAllFields",
    "invalid_credentials": "invalidCredentials",
    "missing_proof": "missingProof",
    "forbidden": "forbidden",
}


def translate(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Look up ``key``; missing keys fall back to English, then to the key."""
    table = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANGUAGE])
    return table.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)


def error_message(code: str, lang: str = DEFAULT_LANGUAGE, fallback: str = "") -> str:
    key = ERROR_MESSAGE_KEYS.get(code)
    if key is None:
        return fallback or translate("error", lang)
    return translate(key, lang)


def load_language(store: LocalStore, default: str = DEFAULT_LANGUAGE) -> str:
    lang = store.get(LANGUAGE_KEY)
    if lang in TRANSLATIONS:
        return lang
    return default if default in TRANSLATIONS else DEFAULT_LANGUAGE


def save_language(store: LocalStore, lang: str) -> None:
    if lang not in TRANSLATIONS:
        raise ValueError(f"Unsupported language: {lang}")
    store.set(LANGUAGE_KEY, lang)

"""
Application constants - URLs, timeouts and the option vocabularies of the
barrier reporting form.

Option texts are the exact strings the application renders; several are
Romanian regardless of the interface language.
"""

from typing import Dict, List, Tuple

from barrier_report_qa.exceptions import InvalidCriteriaError, UnsupportedLanguageError


BASE_URL = "https://app.qsystemsglobal.com/VST/MDA/WebApp"

# Supported interface languages
LANGUAGES: Tuple[str, ...] = ("ru", "en", "ro")

# Timeouts in milliseconds
TIMEOUTS: Dict[str, int] = {
    "short": 5000,
    "medium": 10000,
    "long": 15000,
    "navigation": 30000,
}

AGE_GROUPS: Tuple[str, ...] = (
    "0 - 12 years",
    "13 - 18 years",
    "19 - 24 years",
    "25 - 34 years",
    "35 - 44 years",
    "45 - 54 years",
    "55 - 64 years",
    "65 years and over",
)

GENDERS: Tuple[str, ...] = ("Female", "Male")

IDENTITY_OPTIONS: Tuple[str, ...] = (
    "Nici una din cele menționate",
    "Persoană care m-am aflat mai mult de 3 luni în afa",
    "Person with TB",
    "Person living with HIV",
    "Refugee",
    "Person with a disability",
)

STUDIES_LEVELS: Tuple[str, ...] = (
    "Primare",
    "Gimnaziale",
    "Liceale",
    "Universitare",
    "Post-universitare",
)

LOCATIONS: Tuple[str, ...] = (
    "Anenii Noi",
    "Basarabeasca",
    "Bender",
    "Briceni",
    "Cahul",
    "Camenca",
    "Cantemir",
    "Comrat",
    "Criuleni",
    "Dnestrovsk",
    "Drochia",
)

LOCATION_TYPES: Tuple[str, ...] = ("District", "Area")

TYPE_OF_USER_OPTIONS: Tuple[str, ...] = (
    "Persoana din grup de risc la Tuberculoză",
    "Person in TB treatment",
    "Persoană cu experiență de TB",
    "Person affiliated to a person with TB",
    "Civil society/community organization representative",
    "Medical worker",
    "Social worker",
)

# Barrier label -> sub-options offered once the barrier is opened
TB_BARRIERS: Dict[str, Tuple[str, ...]] = {
    "Nu am acces la medicamente pentru efectele adverse ale tratamentului TB": (
        "Nu stiu unde sa ma adresez",
        "Mi s-a refuzat prescrierea",
        "Altele",
    ),
    "Nu am acces la tratament asistat video pentru TB": (
        "Nu stiu unde sa ma adresez",
        "Mi s-a refuzat includerea",
        "Altele",
    ),
    "Nu am acces la serviciile psihologului.": (
        "Nu stiu unde sa ma adresez",
        "Mi s-a refuzat consultatia",
        "Altele",
    ),
    "Nu am acces la servicii de diagnostic pentru TB": (
        "Nu stiu unde sa ma adresez",
        "Mi s-a refuzat referirea",
        "Nu am bani pentru investigatii",
        "Altele",
    ),
    "Nu am acces la tratament antituberculos": (
        "Medicamentele nu sunt disponibile",
        "Nu stiu unde sa ma adresez",
        "Nu am posibilitate sa ma deplasez dupa medicamente pentru ca nu am bani de drum",
        "Nu am posibilitate sa ma deplasez dupa medicamente din alte cauze",
        "Altele",
    ),
    "Nu am acces la tratament preventiv pentru TB pentru copii": (
        "Medicamentele nu sunt disponibile",
        "Nu stiu unde sa ma adresez",
        "Nu am posibilitate sa ma deplasez dupa medicamente",
        "Altele",
    ),
    "Îmi este dificil să urmez tratamentul pentru TB pentru că nu este adaptat nevoilor mele": (
        "am copii mici acasa de care trebuie sa am grija",
        "trebuie să merg zilnic la lucru",
        "lucrez peste hotare",
        "sunt in varsta si nu ma pot deplasa",
        "apartin unei populații cheie (migrant, immigrant, PTHIV, PUD, LGBT, LS)",
        "apartin unei minoritati etnice",
        "Altele",
    ),
}

UI_TEXT: Dict[str, str] = {
    "barriers_menu": "Reporting identified barriers",
    "anonymous_reporting": "Reporting anonymous",
    "add_button": "Add",
    "save_button": "Save",
    "reports_menu": "Report panel",
    "demographic": "Demographic communities",
    "rights_button": (
        "Dreptul la viața si Dreptul la cel mai inalt standard realizabil "
        "de sănătate fizică și mentală"
    ),
    "other_details": "Alte detalii",
    "date_from": "From",
}

# Form field labels as rendered next to each editor
FIELD_LABELS: Dict[str, str] = {
    "age_group": "Age group",
    "gender": "Gender",
    "identity": "I identify myself as...",
    "location": "Location",
    "location_type": "Location type",
    "studies_level": "Studies level",
    "type_of_user": "TypeOfUser",
    "phone": "Phone",
}

# Report panel filter name -> placeholder shown in its select box
REPORT_FILTERS: Dict[str, str] = {
    "Type Of User": "Type of User",
    "Key population": "Key population",
    "Age": "Age",
}

VOCABULARIES: Dict[str, Tuple[str, ...]] = {
    "age_group": AGE_GROUPS,
    "gender": GENDERS,
    "identity": IDENTITY_OPTIONS,
    "location": LOCATIONS,
    "location_type": LOCATION_TYPES,
    "studies_level": STUDIES_LEVELS,
    "type_of_user": TYPE_OF_USER_OPTIONS,
}


def ensure_language(language: str) -> str:
    """
    Validate an interface language code.

    Raises:
        UnsupportedLanguageError: If the code is not one of LANGUAGES
    """
    if language not in LANGUAGES:
        raise UnsupportedLanguageError(language, LANGUAGES)
    return language


def ensure_vocabulary_value(vocabulary: str, value: str) -> str:
    """
    Validate that value belongs to a named option vocabulary.

    Args:
        vocabulary: Key into VOCABULARIES (e.g. "age_group")
        value: Option text to check

    Raises:
        InvalidCriteriaError: Unknown vocabulary or value outside it
    """
    options = VOCABULARIES.get(vocabulary)
    if options is None:
        raise InvalidCriteriaError(f"Unknown vocabulary: {vocabulary}", key=vocabulary)
    if value not in options:
        raise InvalidCriteriaError(
            f"'{value}' is not a valid {vocabulary} option",
            key=vocabulary,
            value=value,
        )
    return value


def barrier_options(barrier: str) -> List[str]:
    """Sub-options for a TB barrier, raising InvalidCriteriaError if unknown."""
    if barrier not in TB_BARRIERS:
        raise InvalidCriteriaError(f"Unknown TB barrier: {barrier}", key="barrier", value=barrier)
    return list(TB_BARRIERS[barrier])


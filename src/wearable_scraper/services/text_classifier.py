"""Keyword-table text classification for wearable AI products.

Every classifier lower-cases its input and does plain substring matching, so
short keywords can fire inside longer words ("ring" in "monitoring"). The
tables are data: extend them without touching the control flow below.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import UNKNOWN

KeywordGroups = tuple[tuple[str, tuple[str, ...]], ...]


@dataclass(frozen=True)
class ClassifierTables:
    relevance: tuple[str, ...]
    # Ordered; first matching rule wins.
    categories: KeywordGroups
    default_category: str
    # Ordered; first matching placement wins.
    placements: KeywordGroups
    # Every matching modality is reported.
    sensory_inputs: KeywordGroups
    # Ordered; output keeps this order.
    features: tuple[str, ...]
    always_on: tuple[str, ...]
    # Feature words rendered in upper case ("AI", "GPS").
    acronyms: frozenset[str] = frozenset()


@dataclass(frozen=True)
class Classification:
    category: str
    body_placement: str
    sensory_inputs: tuple[str, ...]
    features: tuple[str, ...]
    is_always_on: bool


DEFAULT_TABLES = ClassifierTables(
    relevance=(
        "artificial intelligence",
        "machine learning",
        "neural",
        "neural interface",
        "brain-computer interface",
        "bci",
        "eeg",
        "emg",
        "wearable",
        "wearable tech",
        "wearable ai",
        "ai pin",
        "smart glasses",
        "ar glasses",
        "augmented reality",
        "smartwatch",
        "smart ring",
        "smart earbuds",
        "smart clothing",
        "smart jewelry",
        "health monitor",
        "fitness tracker",
        "biometric",
        "sensor",
        "always-on",
        "always listening",
        "voice assistant",
    ),
    categories=(
        ("Smart Glasses", ("glasses", "augmented reality", "virtual reality", "mixed reality", "headset")),
        ("Smartwatch", ("watch",)),
        ("Smart Ring", ("ring",)),
        ("Smart Earwear", ("earbuds", "headphones")),
        ("AI Assistant", ("pin", "clip", "badge")),
        ("Health Monitor", ("health", "fitness", "medical")),
    ),
    default_category="Wearable AI",
    placements=(
        ("Head-Mounted", ("glasses", "headset", "earbuds", "headphones", "augmented reality", "virtual reality")),
        ("Wrist-Worn", ("watch", "wristband", "bracelet")),
        ("Neck/Torso", ("necklace", "pendant", "pin", "clip", "badge")),
        ("Finger-Worn", ("ring", "finger")),
        ("Face-Mounted", ("mask", "face")),
        ("Foot/Ankle", ("shoe", "insole", "sock", "ankle")),
    ),
    sensory_inputs=(
        ("Visual", ("camera", "vision", "image", "photo", "video", "sight", "eye tracking")),
        ("Audio", ("microphone", "voice", "sound", "hearing", "listen", "speech")),
        ("Touch/Haptic", ("touch", "haptic", "vibration", "pressure", "accelerometer", "gyroscope")),
        ("Biometric", ("heart rate", "pulse", "temperature", "blood", "sweat", "eeg", "emg", "ecg")),
        ("Chemical", ("glucose", "oxygen", "ph level", "hormone", "chemical")),
    ),
    features=(
        "voice assistant",
        "health monitoring",
        "fitness tracking",
        "sleep tracking",
        "heart rate",
        "camera",
        "microphone",
        "gps",
        "bluetooth",
        "wifi",
        "waterproof",
        "battery life",
        "always-on",
        "touch control",
        "gesture control",
        "notification",
        "app",
        "ai assistant",
        "machine learning",
        "neural",
        "augmented reality",
        "virtual reality",
        "mixed reality",
    ),
    always_on=("always on", "always-on", "continuous monitoring", "24/7", "all day"),
    acronyms=frozenset({"ai", "gps"}),
)


def _lower(text: str | None) -> str:
    return (text or "").lower()


def _first_match(groups: KeywordGroups, text: str) -> str | None:
    for tag, keywords in groups:
        if any(keyword in text for keyword in keywords):
            return tag
    return None


class TextClassifier:
    """Maps free text to typed product attributes.

    Stateless apart from its tables; safe to share between tasks.
    """

    def __init__(self, tables: ClassifierTables = DEFAULT_TABLES):
        self._tables = tables

    @property
    def tables(self) -> ClassifierTables:
        return self._tables

    def is_relevant(self, text: str) -> bool:
        lowered = _lower(text)
        return any(keyword in lowered for keyword in self._tables.relevance)

    def classify_category(self, text: str) -> str:
        return _first_match(self._tables.categories, _lower(text)) or self._tables.default_category

    def classify_body_placement(self, text: str) -> str:
        return _first_match(self._tables.placements, _lower(text)) or UNKNOWN

    def classify_sensory_inputs(self, text: str) -> tuple[str, ...]:
        lowered = _lower(text)
        found = [
            modality
            for modality, keywords in self._tables.sensory_inputs
            if any(keyword in lowered for keyword in keywords)
        ]
        return tuple(dict.fromkeys(found)) or (UNKNOWN,)

    def extract_features(self, text: str) -> tuple[str, ...]:
        lowered = _lower(text)
        tags: list[str] = []
        for keyword in self._tables.features:
            if keyword not in lowered:
                continue
            tag = self._feature_tag(keyword)
            if tag not in tags:
                tags.append(tag)
        return tuple(tags)

    def is_always_on(self, text: str) -> bool:
        lowered = _lower(text)
        return any(phrase in lowered for phrase in self._tables.always_on)

    def classify(self, text: str) -> Classification:
        return Classification(
            category=self.classify_category(text),
            body_placement=self.classify_body_placement(text),
            sensory_inputs=self.classify_sensory_inputs(text),
            features=self.extract_features(text),
            is_always_on=self.is_always_on(text),
        )

    def _feature_tag(self, keyword: str) -> str:
        words = keyword.split(" ")
        return " ".join(w.upper() if w in self._tables.acronyms else w.title() for w in words)

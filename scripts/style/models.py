"""
Niche Style Models

Two shapes of style signal for a niche, both read-only to the brief builder:

- NicheStyleProfile: heavier profile analyzed from real product images
  (typography, palette, layout patterns, illustration, mood)
- NicheStyleResult: lighter result of live web research, used as the
  niche default when nothing more specific is known

Both are built from untyped JSON through `from_dict`, which coerces each
field and drops anything of the wrong type.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


def _str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _str_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [v.strip() for v in value if isinstance(v, str) and v.strip()]
    return []


def _confidence(value: Any, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return default
    return max(0.0, min(1.0, float(value)))


class IconUsage(Enum):
    """How often analyzed products in a niche use an icon/illustration."""
    NONE = "none"
    RARE = "rare"
    COMMON = "common"


class StyleResultSource(Enum):
    RESEARCHED = "researched"
    MINIMAL_FALLBACK = "minimal-fallback"


@dataclass
class TypographyPattern:
    primary: Optional[str] = None
    secondary: List[str] = field(default_factory=list)


@dataclass
class ColorPalette:
    primary: List[str] = field(default_factory=list)
    accent: List[str] = field(default_factory=list)
    background: List[str] = field(default_factory=list)


@dataclass
class LayoutPatterns:
    dominant: Optional[str] = None
    text_placement: Optional[str] = None
    icon_usage: Optional[IconUsage] = None


@dataclass
class IllustrationStyle:
    dominant: Optional[str] = None
    subject_matter: List[str] = field(default_factory=list)


@dataclass
class MoodAesthetic:
    primary: Optional[str] = None
    secondary: List[str] = field(default_factory=list)
    avoid: List[str] = field(default_factory=list)
    reference: Optional[str] = None


@dataclass
class NicheStyleProfile:
    """Style profile analyzed from real products in a niche."""
    niche: str
    dominant_typography: TypographyPattern = field(default_factory=TypographyPattern)
    color_palette: ColorPalette = field(default_factory=ColorPalette)
    layout_patterns: Optional[LayoutPatterns] = None
    illustration_style: IllustrationStyle = field(default_factory=IllustrationStyle)
    mood_aesthetic: MoodAesthetic = field(default_factory=MoodAesthetic)
    confidence: float = 0.5
    sample_size: int = 0
    last_analyzed_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NicheStyleProfile":
        """Coerce an untyped (camelCase or snake_case) payload."""
        def section(*keys: str) -> Dict[str, Any]:
            for key in keys:
                value = data.get(key)
                if isinstance(value, dict):
                    return value
            return {}

        typo = section("dominantTypography", "dominant_typography")
        colors = section("colorPalette", "color_palette")
        layout = section("layoutPatterns", "layout_patterns")
        illustration = section("illustrationStyle", "illustration_style")
        mood = section("moodAesthetic", "mood_aesthetic")

        icon_usage = None
        raw_usage = _str(layout.get("iconUsage", layout.get("icon_usage")))
        if raw_usage:
            try:
                icon_usage = IconUsage(raw_usage.lower())
            except ValueError:
                icon_usage = None

        last = data.get("lastAnalyzedAt", data.get("last_analyzed_at"))
        if isinstance(last, str):
            try:
                last = datetime.fromisoformat(last)
            except ValueError:
                last = None
        elif not isinstance(last, datetime):
            last = None

        sample_size = data.get("sampleSize", data.get("sample_size", 0))

        return cls(
            niche=_str(data.get("niche")) or "general",
            dominant_typography=TypographyPattern(
                primary=_str(typo.get("primary")),
                secondary=_str_list(typo.get("secondary"))
            ),
            color_palette=ColorPalette(
                primary=_str_list(colors.get("primary")),
                accent=_str_list(colors.get("accent")),
                background=_str_list(colors.get("background"))
            ),
            layout_patterns=LayoutPatterns(
                dominant=_str(layout.get("dominant")),
                text_placement=_str(layout.get("textPlacement", layout.get("text_placement"))),
                icon_usage=icon_usage
            ) if layout else None,
            illustration_style=IllustrationStyle(
                dominant=_str(illustration.get("dominant")),
                subject_matter=_str_list(illustration.get("subjectMatter", illustration.get("subject_matter")))
            ),
            mood_aesthetic=MoodAesthetic(
                primary=_str(mood.get("primary")),
                secondary=_str_list(mood.get("secondary")),
                avoid=_str_list(mood.get("avoid")),
                reference=_str(mood.get("reference"))
            ),
            confidence=_confidence(data.get("confidence"), 0.5),
            sample_size=sample_size if isinstance(sample_size, int) and not isinstance(sample_size, bool) else 0,
            last_analyzed_at=last
        )


@dataclass
class StoredDataMeta:
    """How a research result relates to what was already stored."""
    stored_context_used: bool = False
    stored_data_agreement: str = "no-stored-data"  # agrees | disagrees | novel | no-stored-data
    written_to_db: bool = False


@dataclass
class NicheStyleResult:
    """Style defaults for a niche from live research (or the minimal fallback)."""
    typography: str
    effects: List[str]
    color_palette: List[str]
    mood: str
    shirt_color: str
    aesthetic: str
    source: StyleResultSource
    confidence: float
    meta: StoredDataMeta = field(default_factory=StoredDataMeta)

    @property
    def is_researched(self) -> bool:
        return self.source == StyleResultSource.RESEARCHED

    @classmethod
    def from_research_json(cls, data: Dict[str, Any], niche: str, confidence: float = 0.75) -> "NicheStyleResult":
        """Coerce a research payload; each missing field gets its own default."""
        palette = _str_list(data.get("colorPalette", data.get("color_palette")))
        return cls(
            typography=_str(data.get("typography")) or "bold readable sans-serif",
            effects=_str_list(data.get("effects")) if isinstance(data.get("effects"), list) else [],
            color_palette=palette or ["versatile tones"],
            mood=_str(data.get("mood")) or "balanced",
            shirt_color=_str(data.get("shirtColor", data.get("shirt_color"))) or "black",
            aesthetic=_str(data.get("aesthetic")) or f"{niche} community style",
            source=StyleResultSource.RESEARCHED,
            confidence=confidence
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "typography": self.typography,
            "effects": list(self.effects),
            "color_palette": list(self.color_palette),
            "mood": self.mood,
            "shirt_color": self.shirt_color,
            "aesthetic": self.aesthetic,
            "source": self.source.value,
            "confidence": self.confidence
        }


def minimal_fallback() -> NicheStyleResult:
    """Style used when research is unavailable or fails."""
    return NicheStyleResult(
        typography="bold readable sans-serif",
        effects=[],
        color_palette=["adaptable neutral tones"],
        mood="versatile",
        shirt_color="black",
        aesthetic="clean professional",
        source=StyleResultSource.MINIMAL_FALLBACK,
        confidence=0.3
    )

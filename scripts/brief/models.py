"""
Design Brief Models

The design brief is the binding creative contract between selection and
prompt execution. Every sub-contract field must be populated before a
brief reaches the compliance executor; `DesignBrief.validate()` enforces
this and raises BriefContractError otherwise.

Inputs to the builder are coerced here too: TrendSignal.from_dict accepts
the loosely typed payloads produced by research agents (camelCase or
snake_case keys) and drops anything of the wrong type.
"""

import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from style.models import _str, _str_list


class BriefContractError(ValueError):
    """A required brief field is missing after the builder claimed success."""


class StyleSource(Enum):
    """Highest-priority source that shaped the brief's style."""
    DISCOVERED = "discovered"
    RESEARCHED = "researched"
    USER_SPECIFIED = "user-specified"
    NICHE_DEFAULT = "niche-default"
    NICHE_RESEARCHED = "niche-researched"


@dataclass
class TextSpec:
    exact: str
    max_length: Optional[int] = None
    preserve_case: bool = True


@dataclass
class TypographySpec:
    required: str
    forbidden: List[str] = field(default_factory=list)
    weight: str = "bold"
    effects: List[str] = field(default_factory=list)


@dataclass
class ColorApproach:
    palette: List[str]
    mood: str
    shirt_color: str
    forbidden: List[str] = field(default_factory=list)


@dataclass
class AestheticSpec:
    primary: str
    keywords: List[str] = field(default_factory=list)
    reference: Optional[str] = None
    forbidden: List[str] = field(default_factory=list)


@dataclass
class LayoutSpec:
    composition: str
    text_placement: str
    include_icon: bool = True
    icon_style: Optional[str] = None


@dataclass
class StyleSpec:
    source: StyleSource
    confidence: float
    typography: TypographySpec
    color_approach: ColorApproach
    aesthetic: AestheticSpec
    layout: LayoutSpec


@dataclass
class BriefContext:
    niche: str
    audience_description: str
    tone: str
    seasonal_modifier: Optional[str] = None
    cross_niche_blend: List[str] = field(default_factory=list)


def generate_brief_id(now: Optional[float] = None, rng: Optional[random.Random] = None) -> str:
    """brief-<epoch millis>-<9 random base36 chars>"""
    rng = rng or random.Random()
    millis = int((now if now is not None else time.time()) * 1000)
    suffix = "".join(rng.choice(string.ascii_lowercase + string.digits) for _ in range(9))
    return f"brief-{millis}-{suffix}"


@dataclass
class BriefMetadata:
    brief_id: str = field(default_factory=generate_brief_id)
    created_at: datetime = field(default_factory=datetime.now)
    research_source: str = "trend-data"
    style_confidence: float = 0.0
    original_trend_data: Optional[Dict[str, Any]] = None
    text_adjustments: List[str] = field(default_factory=list)


@dataclass
class DesignBrief:
    """The creative contract handed to the compliance executor."""
    text: TextSpec
    style: StyleSpec
    context: BriefContext
    metadata: BriefMetadata = field(default_factory=BriefMetadata)

    def validate(self) -> "DesignBrief":
        """
        Check that every required field is populated.

        Raises:
            BriefContractError: naming the first empty field
        """
        required = {
            "text.exact": self.text.exact,
            "style.typography.required": self.style.typography.required,
            "style.typography.weight": self.style.typography.weight,
            "style.color_approach.palette": self.style.color_approach.palette,
            "style.color_approach.mood": self.style.color_approach.mood,
            "style.color_approach.shirt_color": self.style.color_approach.shirt_color,
            "style.aesthetic.primary": self.style.aesthetic.primary,
            "style.aesthetic.keywords": self.style.aesthetic.keywords,
            "style.layout.composition": self.style.layout.composition,
            "style.layout.text_placement": self.style.layout.text_placement,
            "context.niche": self.context.niche,
            "context.audience_description": self.context.audience_description,
            "context.tone": self.context.tone,
        }
        for name, value in required.items():
            if isinstance(value, str):
                value = value.strip()
            if not value:
                raise BriefContractError(f"Design brief field '{name}' is empty")

        if self.style.layout.include_icon and not self.style.layout.icon_style:
            raise BriefContractError("Design brief includes an icon but has no icon style")
        if not 0.0 <= self.style.confidence <= 1.0:
            raise BriefContractError(f"Style confidence {self.style.confidence} outside [0, 1]")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": {
                "exact": self.text.exact,
                "max_length": self.text.max_length,
                "preserve_case": self.text.preserve_case
            },
            "style": {
                "source": self.style.source.value,
                "confidence": self.style.confidence,
                "typography": {
                    "required": self.style.typography.required,
                    "forbidden": list(self.style.typography.forbidden),
                    "weight": self.style.typography.weight,
                    "effects": list(self.style.typography.effects)
                },
                "color_approach": {
                    "palette": list(self.style.color_approach.palette),
                    "mood": self.style.color_approach.mood,
                    "shirt_color": self.style.color_approach.shirt_color,
                    "forbidden": list(self.style.color_approach.forbidden)
                },
                "aesthetic": {
                    "primary": self.style.aesthetic.primary,
                    "keywords": list(self.style.aesthetic.keywords),
                    "reference": self.style.aesthetic.reference,
                    "forbidden": list(self.style.aesthetic.forbidden)
                },
                "layout": {
                    "composition": self.style.layout.composition,
                    "text_placement": self.style.layout.text_placement,
                    "include_icon": self.style.layout.include_icon,
                    "icon_style": self.style.layout.icon_style
                }
            },
            "context": {
                "niche": self.context.niche,
                "audience_description": self.context.audience_description,
                "tone": self.context.tone,
                "seasonal_modifier": self.context.seasonal_modifier,
                "cross_niche_blend": list(self.context.cross_niche_blend)
            },
            "metadata": {
                "brief_id": self.metadata.brief_id,
                "created_at": self.metadata.created_at.isoformat(),
                "research_source": self.metadata.research_source,
                "style_confidence": self.metadata.style_confidence,
                "text_adjustments": list(self.metadata.text_adjustments)
            }
        }


@dataclass
class TextLayout:
    """Layout decided by a research agent."""
    positioning: Optional[str] = None
    emphasis: Optional[str] = None
    sizing: Optional[str] = None
    reasoning: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional["TextLayout"]:
        if not isinstance(data, dict):
            return None
        return cls(
            positioning=_str(data.get("positioning")),
            emphasis=_str(data.get("emphasis")),
            sizing=_str(data.get("sizing")),
            reasoning=_str(data.get("reasoning"))
        )


@dataclass
class TrendSignal:
    """Upstream trend/research data the brief is built from. All fields optional."""
    topic: Optional[str] = None
    design_text: Optional[str] = None
    phrase: Optional[str] = None
    niche: Optional[str] = None
    audience_profile: Optional[str] = None
    visual_style: Optional[str] = None
    design_style: Optional[str] = None
    color_palette: Optional[str] = None
    recommended_shirt_color: Optional[str] = None
    sentiment: Optional[str] = None
    typography_style: Optional[str] = None
    text_layout: Optional[TextLayout] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TrendSignal":
        def pick(*keys: str) -> Any:
            for key in keys:
                if key in data:
                    return data[key]
            return None

        palette = pick("colorPalette", "color_palette")
        if isinstance(palette, (list, tuple)):
            palette = ", ".join(_str_list(palette)) or None

        return cls(
            topic=_str(pick("topic")),
            design_text=_str(pick("designText", "design_text")),
            phrase=_str(pick("phrase")),
            niche=_str(pick("niche")),
            audience_profile=_str(pick("audienceProfile", "audience_profile")),
            visual_style=_str(pick("visualStyle", "visual_style")),
            design_style=_str(pick("designStyle", "design_style")),
            color_palette=_str(palette),
            recommended_shirt_color=_str(pick("recommendedShirtColor", "recommended_shirt_color")),
            sentiment=_str(pick("sentiment")),
            typography_style=_str(pick("typographyStyle", "typography_style")),
            text_layout=TextLayout.from_dict(pick("textLayout", "text_layout"))
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "topic": self.topic,
            "design_text": self.design_text,
            "phrase": self.phrase,
            "niche": self.niche,
            "audience_profile": self.audience_profile,
            "visual_style": self.visual_style,
            "design_style": self.design_style,
            "color_palette": self.color_palette,
            "recommended_shirt_color": self.recommended_shirt_color,
            "sentiment": self.sentiment,
            "typography_style": self.typography_style
        }
        if self.text_layout:
            data["text_layout"] = {
                "positioning": self.text_layout.positioning,
                "emphasis": self.text_layout.emphasis,
                "sizing": self.text_layout.sizing,
                "reasoning": self.text_layout.reasoning
            }
        return {k: v for k, v in data.items() if v is not None}


@dataclass
class UserOverrides:
    text: Optional[str] = None
    style: Optional[str] = None
    tone: Optional[str] = None

"""
Brief Field Resolvers

Each brief field is resolved by an ordered list of small functions. A
resolver returns None when its source has nothing to say, and the first
non-None result wins. Every list ends in a resolver that always answers,
so resolution is total.

    typography: niche profile > trend typography > visual-style hints
                > user-style hints > niche default > minimal fallback
    palette:    niche profile > trend palette > niche default > minimal fallback
    shirt:      niche profile background > trend shirt > niche default > black
    mood:       visual-style keywords > researched niche mood > tone mood
                > minimal niche default > balanced
    aesthetic:  niche profile > trend visual style > trend design style
                > user style > niche default > minimal fallback
    layout:     agent text layout > niche layout patterns > centered default
    icon style: visual-style hint > niche illustration > tone > complementary

Resolvers take a BriefInputs bundle so they can be tested in isolation.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, TypeVar

from style.models import IconUsage, NicheStyleProfile, NicheStyleResult, minimal_fallback

from .models import TrendSignal, UserOverrides
from .tables import BriefTables, DEFAULT_TABLES, ToneEnrichment

T = TypeVar("T")

FALLBACK_TYPOGRAPHY = "bold readable sans-serif"
FALLBACK_PALETTE = ["versatile neutral tones"]
FALLBACK_SHIRT_COLOR = "black"
FALLBACK_MOOD = "balanced"
FALLBACK_AESTHETIC = "clean professional"
FALLBACK_KEYWORDS = ["professional", "readable"]
FALLBACK_COMPOSITION = "centered, balanced composition"
FALLBACK_TEXT_PLACEMENT = "centered"
FALLBACK_ICON_STYLE = "complementary illustration that enhances the text message"


@dataclass
class BriefInputs:
    """Everything a resolver may look at."""
    trend: TrendSignal
    niche_style: Optional[NicheStyleProfile] = None
    overrides: UserOverrides = field(default_factory=UserOverrides)
    niche_defaults: NicheStyleResult = field(default_factory=minimal_fallback)
    tone: str = "funny"
    tables: BriefTables = DEFAULT_TABLES

    @property
    def tone_enrichment(self) -> ToneEnrichment:
        return self.tables.get_tone_enrichment(self.tone)

    @property
    def visual_style(self) -> str:
        return (self.trend.visual_style or "").lower()


@dataclass
class TypographyChoice:
    required: str
    effects: List[str] = field(default_factory=list)
    specific: bool = True
    source: str = ""


@dataclass
class PaletteChoice:
    palette: List[str]
    source: str = ""


@dataclass
class AestheticChoice:
    primary: str
    keywords: List[str]
    specific: bool = True
    reference: Optional[str] = None
    forbidden: List[str] = field(default_factory=list)
    source: str = ""


@dataclass
class LayoutChoice:
    composition: str
    text_placement: str
    source: str = ""


@dataclass
class TextOnlyDecision:
    text_only: bool
    reasoning: str


Resolver = Callable[[BriefInputs], Optional[T]]


def resolve(resolvers: Sequence[Resolver], inputs: BriefInputs):
    """First non-None answer from an ordered resolver list."""
    for resolver in resolvers:
        value = resolver(inputs)
        if value is not None:
            return value
    raise LookupError("Resolver list has no terminal fallback")


def extract_keywords(style: str, tables: BriefTables = DEFAULT_TABLES) -> List[str]:
    """Style-vocabulary words found in a description, in order of appearance."""
    keywords = []
    for word in re.split(r"[\s,;]+", style.lower()):
        if word in tables.style_vocabulary and word not in keywords:
            keywords.append(word)
    return keywords or ["balanced", "readable"]


def _hint_match(text: Optional[str], hints) -> Optional[TypographyChoice]:
    if not text:
        return None
    lowered = text.lower()
    for keyword, typography, effect in hints:
        if keyword in lowered:
            return TypographyChoice(
                required=typography,
                effects=[effect] if effect else [],
                source=keyword
            )
    return None


# =============================================================================
# Typography
# =============================================================================

def typography_from_niche_style(inputs: BriefInputs) -> Optional[TypographyChoice]:
    if inputs.niche_style and inputs.niche_style.dominant_typography.primary:
        return TypographyChoice(inputs.niche_style.dominant_typography.primary, source="niche-style")
    return None


def typography_from_trend(inputs: BriefInputs) -> Optional[TypographyChoice]:
    if inputs.trend.typography_style:
        return TypographyChoice(inputs.trend.typography_style, source="trend")
    return None


def typography_from_visual_style(inputs: BriefInputs) -> Optional[TypographyChoice]:
    choice = _hint_match(inputs.trend.visual_style, inputs.tables.visual_typography_hints)
    if choice:
        choice.source = "visual-style"
    return choice


def typography_from_user_style(inputs: BriefInputs) -> Optional[TypographyChoice]:
    choice = _hint_match(inputs.overrides.style, inputs.tables.user_typography_hints)
    if choice:
        choice.source = "user-style"
    return choice


def typography_from_niche_default(inputs: BriefInputs) -> Optional[TypographyChoice]:
    if inputs.niche_defaults.is_researched and inputs.niche_defaults.typography:
        return TypographyChoice(inputs.niche_defaults.typography, specific=False, source="niche-default")
    return None


def typography_fallback(inputs: BriefInputs) -> TypographyChoice:
    return TypographyChoice(
        inputs.niche_defaults.typography or FALLBACK_TYPOGRAPHY,
        specific=False,
        source="fallback"
    )


TYPOGRAPHY_RESOLVERS: List[Resolver] = [
    typography_from_niche_style,
    typography_from_trend,
    typography_from_visual_style,
    typography_from_user_style,
    typography_from_niche_default,
    typography_fallback,
]


# =============================================================================
# Color approach
# =============================================================================

def palette_from_niche_style(inputs: BriefInputs) -> Optional[PaletteChoice]:
    if inputs.niche_style and inputs.niche_style.color_palette.primary:
        return PaletteChoice(list(inputs.niche_style.color_palette.primary), source="niche-style")
    return None


def palette_from_trend(inputs: BriefInputs) -> Optional[PaletteChoice]:
    raw = inputs.trend.color_palette
    if not raw:
        return None
    palette = [c.strip() for c in re.split(r"[,;]", raw) if c.strip()]
    return PaletteChoice(palette or [raw], source="trend")


def palette_from_niche_default(inputs: BriefInputs) -> Optional[PaletteChoice]:
    if inputs.niche_defaults.is_researched and inputs.niche_defaults.color_palette:
        return PaletteChoice(list(inputs.niche_defaults.color_palette), source="niche-default")
    return None


def palette_fallback(inputs: BriefInputs) -> PaletteChoice:
    return PaletteChoice(list(inputs.niche_defaults.color_palette or FALLBACK_PALETTE), source="fallback")


PALETTE_RESOLVERS: List[Resolver] = [
    palette_from_niche_style,
    palette_from_trend,
    palette_from_niche_default,
    palette_fallback,
]


def shirt_from_niche_style(inputs: BriefInputs) -> Optional[str]:
    palette = inputs.niche_style.color_palette if inputs.niche_style else None
    if palette and palette.primary and palette.background:
        return palette.background[0]
    return None


def shirt_from_trend(inputs: BriefInputs) -> Optional[str]:
    return inputs.trend.recommended_shirt_color


def shirt_from_niche_default(inputs: BriefInputs) -> Optional[str]:
    return inputs.niche_defaults.shirt_color or None


def shirt_fallback(inputs: BriefInputs) -> str:
    return FALLBACK_SHIRT_COLOR


SHIRT_COLOR_RESOLVERS: List[Resolver] = [
    shirt_from_niche_style,
    shirt_from_trend,
    shirt_from_niche_default,
    shirt_fallback,
]


def mood_from_visual_style(inputs: BriefInputs) -> Optional[str]:
    visual = inputs.visual_style
    if not visual:
        return None
    for keywords, mood in inputs.tables.mood_keywords:
        if any(k in visual for k in keywords):
            return mood
    return None


def mood_from_researched_niche(inputs: BriefInputs) -> Optional[str]:
    if inputs.niche_defaults.is_researched:
        return inputs.niche_defaults.mood or None
    return None


def mood_from_tone(inputs: BriefInputs) -> Optional[str]:
    return inputs.tone_enrichment.mood


def mood_from_niche_default(inputs: BriefInputs) -> Optional[str]:
    return inputs.niche_defaults.mood or None


def mood_fallback(inputs: BriefInputs) -> str:
    return FALLBACK_MOOD


MOOD_RESOLVERS: List[Resolver] = [
    mood_from_visual_style,
    mood_from_researched_niche,
    mood_from_tone,
    mood_from_niche_default,
    mood_fallback,
]


# =============================================================================
# Aesthetic
# =============================================================================

def aesthetic_from_niche_style(inputs: BriefInputs) -> Optional[AestheticChoice]:
    mood = inputs.niche_style.mood_aesthetic if inputs.niche_style else None
    if not mood or not mood.primary:
        return None
    return AestheticChoice(
        primary=mood.primary,
        keywords=extract_keywords(" ".join([mood.primary] + list(mood.secondary)), inputs.tables),
        reference=mood.reference,
        forbidden=list(mood.avoid),
        source="niche-style"
    )


def _aesthetic_from_text(text: Optional[str], inputs: BriefInputs, source: str) -> Optional[AestheticChoice]:
    if not text:
        return None
    return AestheticChoice(
        primary=text,
        keywords=extract_keywords(text, inputs.tables),
        source=source
    )


def aesthetic_from_visual_style(inputs: BriefInputs) -> Optional[AestheticChoice]:
    # Used verbatim, never compressed
    return _aesthetic_from_text(inputs.trend.visual_style, inputs, "visual-style")


def aesthetic_from_design_style(inputs: BriefInputs) -> Optional[AestheticChoice]:
    return _aesthetic_from_text(inputs.trend.design_style, inputs, "design-style")


def aesthetic_from_user_style(inputs: BriefInputs) -> Optional[AestheticChoice]:
    return _aesthetic_from_text(inputs.overrides.style, inputs, "user-style")


def aesthetic_from_niche_default(inputs: BriefInputs) -> Optional[AestheticChoice]:
    if inputs.niche_defaults.is_researched and inputs.niche_defaults.aesthetic:
        return AestheticChoice(
            primary=inputs.niche_defaults.aesthetic,
            keywords=list(FALLBACK_KEYWORDS),
            specific=False,
            source="niche-default"
        )
    return None


def aesthetic_fallback(inputs: BriefInputs) -> AestheticChoice:
    return AestheticChoice(
        primary=inputs.niche_defaults.aesthetic or FALLBACK_AESTHETIC,
        keywords=list(FALLBACK_KEYWORDS),
        specific=False,
        source="fallback"
    )


AESTHETIC_RESOLVERS: List[Resolver] = [
    aesthetic_from_niche_style,
    aesthetic_from_visual_style,
    aesthetic_from_design_style,
    aesthetic_from_user_style,
    aesthetic_from_niche_default,
    aesthetic_fallback,
]


# =============================================================================
# Layout
# =============================================================================

def layout_from_text_layout(inputs: BriefInputs) -> Optional[LayoutChoice]:
    layout = inputs.trend.text_layout
    if not layout:
        return None

    parts = []
    if layout.positioning:
        parts.append(layout.positioning)
    if layout.emphasis:
        parts.append(f"emphasis: {layout.emphasis}")
    if layout.sizing:
        parts.append(f"sizing: {layout.sizing}")
    if not parts:
        return None

    return LayoutChoice(
        composition="; ".join(parts),
        text_placement=layout.positioning or FALLBACK_TEXT_PLACEMENT,
        source="text-layout"
    )


def layout_from_niche_style(inputs: BriefInputs) -> Optional[LayoutChoice]:
    patterns = inputs.niche_style.layout_patterns if inputs.niche_style else None
    if not patterns or not (patterns.dominant or patterns.text_placement):
        return None
    return LayoutChoice(
        composition=patterns.dominant or FALLBACK_COMPOSITION,
        text_placement=patterns.text_placement or FALLBACK_TEXT_PLACEMENT,
        source="niche-style"
    )


def layout_fallback(inputs: BriefInputs) -> LayoutChoice:
    return LayoutChoice(FALLBACK_COMPOSITION, FALLBACK_TEXT_PLACEMENT, source="fallback")


LAYOUT_RESOLVERS: List[Resolver] = [
    layout_from_text_layout,
    layout_from_niche_style,
    layout_fallback,
]


def text_only_decision(inputs: BriefInputs) -> TextOnlyDecision:
    """
    Decide whether the design should skip visual elements.

    Only explicit signals count: the visual style asking for text only (or
    minimal and clean with no icon or illustration mentioned), analyzed
    niche data with no icon usage, or agent reasoning arguing for
    typography alone. Tone never forces text-only.
    """
    visual = inputs.visual_style
    if visual:
        if "text only" in visual or "typography only" in visual or "text-only" in visual:
            return TextOnlyDecision(True, "Research indicates text-only designs perform well for this niche")
        if ("minimal" in visual and "clean" in visual
                and "icon" not in visual and "illustration" not in visual):
            return TextOnlyDecision(True, "Research suggests minimal clean typography approach")

    patterns = inputs.niche_style.layout_patterns if inputs.niche_style else None
    if patterns and patterns.icon_usage == IconUsage.NONE:
        return TextOnlyDecision(True, "Analyzed products in this niche predominantly use text-only designs")

    layout = inputs.trend.text_layout
    if layout and layout.reasoning:
        reasoning = layout.reasoning.lower()
        if "text only" in reasoning or "typography focus" in reasoning:
            return TextOnlyDecision(True, layout.reasoning)

    if not inputs.tone_enrichment.prefer_visuals:
        return TextOnlyDecision(False, f"{inputs.tone} tone - visuals optional but can add credibility")

    return TextOnlyDecision(False, "No strong indication for text-only - include visual elements")


def icon_style_from_visual_style(inputs: BriefInputs) -> Optional[str]:
    visual = inputs.visual_style
    if "illustration" in visual or "icon" in visual or "graphic" in visual:
        return "simple line art" if "simple" in visual else "detailed illustration"
    return None


def icon_style_from_niche_style(inputs: BriefInputs) -> Optional[str]:
    if not inputs.niche_style or not inputs.niche_style.layout_patterns:
        return None
    if inputs.niche_style.layout_patterns.icon_usage == IconUsage.COMMON:
        return inputs.niche_style.illustration_style.dominant
    return None


def icon_style_from_tone(inputs: BriefInputs) -> Optional[str]:
    return inputs.tone_enrichment.icon_style


def icon_style_fallback(inputs: BriefInputs) -> str:
    return FALLBACK_ICON_STYLE


ICON_STYLE_RESOLVERS: List[Resolver] = [
    icon_style_from_visual_style,
    icon_style_from_niche_style,
    icon_style_from_tone,
    icon_style_fallback,
]

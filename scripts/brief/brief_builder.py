"""
Design Brief Builder

Turns partial upstream signals into a complete DesignBrief:

    trend signal (topic, text, visual style, palette, layout, ...)
    + analyzed niche style profile (optional)
    + user overrides (text, style, tone)
    + researched niche defaults (fetched once per brief)
    -> DesignBrief, validated

Each style field is resolved by an ordered resolver list (brief.resolvers).
Tone enrichment decorates typography and aesthetic only when no specific
upstream signal set them. The builder validates the brief before returning
it; a BriefContractError means a cascade bug, never a flaky collaborator.

Usage:
    from brief import DesignBriefBuilder, TrendSignal

    builder = DesignBriefBuilder()
    brief = builder.build_brief(TrendSignal(design_text="Coffee Then Adulting"))
    print(brief.to_dict())
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from style.models import IconUsage, NicheStyleProfile, NicheStyleResult, minimal_fallback
from style.niche_style_researcher import NicheStyleResearcher

from .context_detection import detect_cross_niche, detect_seasonal, extract_niche_from_topic
from .models import (
    AestheticSpec,
    BriefContext,
    BriefMetadata,
    ColorApproach,
    DesignBrief,
    LayoutSpec,
    StyleSource,
    StyleSpec,
    TextSpec,
    TrendSignal,
    TypographySpec,
    UserOverrides,
)
from .resolvers import (
    AESTHETIC_RESOLVERS,
    ICON_STYLE_RESOLVERS,
    LAYOUT_RESOLVERS,
    MOOD_RESOLVERS,
    PALETTE_RESOLVERS,
    SHIRT_COLOR_RESOLVERS,
    TYPOGRAPHY_RESOLVERS,
    BriefInputs,
    resolve,
    text_only_decision,
)
from .tables import BriefTables, DEFAULT_TABLES

logger = logging.getLogger(__name__)

DEFAULT_TEXT = "Design"
DEFAULT_TONE = "funny"
VISUAL_STYLE_CONFIDENCE = 0.7


@dataclass
class BriefPolicy:
    """Builder policy knobs."""
    include_icon_by_default: bool = True
    max_text_length: Optional[int] = None


def enforce_text_length(text: str, max_length: Optional[int]):
    """
    Shorten text to max_length at a word boundary.

    Returns:
        (text, adjustment note or None)
    """
    if not max_length or len(text) <= max_length:
        return text, None

    cut = text[:max_length]
    if text[max_length] != " " and " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    cut = cut.rstrip(" ,;:-")
    if not cut:
        cut = text[:max_length]

    note = f"Text truncated from {len(text)} to {len(cut)} characters (max {max_length})"
    return cut, note


class DesignBriefBuilder:
    """Builds complete design briefs from partial signals."""

    def __init__(
        self,
        style_researcher: Optional[NicheStyleResearcher] = None,
        tables: BriefTables = DEFAULT_TABLES,
        policy: Optional[BriefPolicy] = None
    ):
        """
        Args:
            style_researcher: Source of niche defaults (None = minimal fallback)
            tables: Lookup tables
            policy: Icon default and text length policy
        """
        self.style_researcher = style_researcher
        self.tables = tables
        self.policy = policy or BriefPolicy()

    def build_brief(
        self,
        trend: Union[TrendSignal, Dict[str, Any], None],
        niche_style: Optional[NicheStyleProfile] = None,
        user_overrides: Optional[UserOverrides] = None
    ) -> DesignBrief:
        """
        Build and validate a design brief.

        Args:
            trend: Trend signal (dicts are coerced)
            niche_style: Analyzed niche style profile
            user_overrides: Text, style and tone set by the user

        Returns:
            Validated DesignBrief

        Raises:
            BriefContractError: a required field is empty after resolution
        """
        if trend is None:
            trend = TrendSignal()
        elif isinstance(trend, dict):
            trend = TrendSignal.from_dict(trend)
        overrides = user_overrides or UserOverrides()

        text = (_clean(overrides.text) or trend.design_text or trend.phrase
                or trend.topic or DEFAULT_TEXT)
        niche = trend.niche or extract_niche_from_topic(trend.topic, self.tables)
        tone = _clean(overrides.tone) or trend.sentiment or DEFAULT_TONE

        niche_defaults = self._niche_defaults(niche)
        logger.info(
            "Using %s style for '%s' (confidence %.2f), tone '%s'",
            niche_defaults.source.value, niche, niche_defaults.confidence, tone
        )

        inputs = BriefInputs(
            trend=trend,
            niche_style=niche_style,
            overrides=overrides,
            niche_defaults=niche_defaults,
            tone=tone,
            tables=self.tables
        )

        text_adjustments = []
        text, note = enforce_text_length(text, self.policy.max_text_length)
        if note:
            logger.warning("%s: '%s'", note, text)
            text_adjustments.append(note)

        confidence = self._style_confidence(inputs)
        brief = DesignBrief(
            text=TextSpec(exact=text, max_length=self.policy.max_text_length, preserve_case=True),
            style=StyleSpec(
                source=self._style_source(inputs),
                confidence=confidence,
                typography=self.build_typography(inputs),
                color_approach=self.build_color_approach(inputs),
                aesthetic=self.build_aesthetic(inputs),
                layout=self.build_layout(inputs)
            ),
            context=BriefContext(
                niche=niche,
                audience_description=trend.audience_profile or f"{niche} enthusiasts",
                tone=tone,
                seasonal_modifier=detect_seasonal(text, trend.topic, self.tables),
                cross_niche_blend=detect_cross_niche(niche, text, trend.topic, self.tables)
            ),
            metadata=BriefMetadata(
                style_confidence=confidence,
                original_trend_data=trend.to_dict(),
                text_adjustments=text_adjustments
            )
        )
        return brief.validate()

    def build_typography(self, inputs: BriefInputs) -> TypographySpec:
        choice = resolve(TYPOGRAPHY_RESOLVERS, inputs)
        required = choice.required
        effects = list(inputs.niche_defaults.effects)
        for effect in choice.effects:
            if effect not in effects:
                effects.append(effect)

        if not choice.specific:
            enrichment = inputs.tone_enrichment
            if enrichment.typography_hints:
                required = f"{required} with {', '.join(enrichment.typography_hints)} qualities"
            if len(effects) < 2:
                for effect in enrichment.effects:
                    if effect not in effects:
                        effects.append(effect)
            logger.debug("Typography enriched with tone '%s': %s", inputs.tone, required)

        return TypographySpec(
            required=required,
            forbidden=self._forbidden(inputs, self.tables.forbidden_typography_rules),
            weight="bold",
            effects=effects
        )

    def build_color_approach(self, inputs: BriefInputs) -> ColorApproach:
        return ColorApproach(
            palette=resolve(PALETTE_RESOLVERS, inputs).palette,
            mood=resolve(MOOD_RESOLVERS, inputs),
            shirt_color=resolve(SHIRT_COLOR_RESOLVERS, inputs),
            forbidden=self._forbidden(inputs, self.tables.forbidden_color_rules)
        )

    def build_aesthetic(self, inputs: BriefInputs) -> AestheticSpec:
        choice = resolve(AESTHETIC_RESOLVERS, inputs)
        primary = choice.primary
        keywords = list(choice.keywords)

        if not choice.specific:
            enrichment = inputs.tone_enrichment
            lead = enrichment.aesthetic_keywords[0] if enrichment.aesthetic_keywords else "engaging"
            primary = f"{lead} {primary}"
            for keyword in enrichment.aesthetic_keywords:
                if keyword not in keywords:
                    keywords.append(keyword)
            logger.debug("Aesthetic enriched with tone '%s': %s", inputs.tone, primary)

        if inputs.niche_style:
            for subject in inputs.niche_style.illustration_style.subject_matter:
                if subject not in keywords:
                    keywords.append(subject)

        return AestheticSpec(
            primary=primary,
            keywords=keywords,
            reference=choice.reference,
            forbidden=choice.forbidden
        )

    def build_layout(self, inputs: BriefInputs) -> LayoutSpec:
        choice = resolve(LAYOUT_RESOLVERS, inputs)
        decision = text_only_decision(inputs)

        if decision.text_only:
            include_icon = False
            logger.info("Text-only design: %s", decision.reasoning)
        else:
            include_icon = self.policy.include_icon_by_default or _niche_uses_icons(inputs)

        return LayoutSpec(
            composition=choice.composition,
            text_placement=choice.text_placement,
            include_icon=include_icon,
            icon_style=resolve(ICON_STYLE_RESOLVERS, inputs) if include_icon else None
        )

    def _niche_defaults(self, niche: str) -> NicheStyleResult:
        if self.style_researcher is None:
            return minimal_fallback()
        try:
            return self.style_researcher.research(niche)
        except Exception as e:
            logger.warning("Niche style research raised for '%s': %s", niche, e)
            return minimal_fallback()

    def _style_source(self, inputs: BriefInputs) -> StyleSource:
        if inputs.niche_style:
            return StyleSource.DISCOVERED
        if inputs.trend.visual_style:
            return StyleSource.RESEARCHED
        if inputs.overrides.style:
            return StyleSource.USER_SPECIFIED
        if inputs.niche_defaults.is_researched:
            return StyleSource.NICHE_RESEARCHED
        return StyleSource.NICHE_DEFAULT

    def _style_confidence(self, inputs: BriefInputs) -> float:
        if inputs.niche_style:
            return inputs.niche_style.confidence
        if inputs.trend.visual_style:
            return VISUAL_STYLE_CONFIDENCE
        return inputs.niche_defaults.confidence

    def _forbidden(self, inputs: BriefInputs, rules):
        if not inputs.niche_style:
            return []
        forbidden = []
        for avoid in inputs.niche_style.mood_aesthetic.avoid:
            lowered = avoid.lower()
            for needle, entry in rules:
                if needle in lowered and entry not in forbidden:
                    forbidden.append(entry)
        return forbidden


def _clean(value: Optional[str]) -> Optional[str]:
    if value and value.strip():
        return value.strip()
    return None


def _niche_uses_icons(inputs: BriefInputs) -> bool:
    patterns = inputs.niche_style.layout_patterns if inputs.niche_style else None
    return bool(patterns and patterns.icon_usage == IconUsage.COMMON)


def create_brief_builder(
    style_researcher: Optional[NicheStyleResearcher] = None,
    include_icon_by_default: bool = True,
    max_text_length: Optional[int] = None
) -> DesignBriefBuilder:
    """Builder with the default tables and the given policy."""
    return DesignBriefBuilder(
        style_researcher=style_researcher,
        policy=BriefPolicy(
            include_icon_by_default=include_icon_by_default,
            max_text_length=max_text_length
        )
    )

"""
Brief module for merch generation.

- models: the design brief contract and builder inputs
- tables: tone enrichments and keyword tables
- resolvers: ordered per-field resolution
- context_detection: niche, seasonal and cross-niche detection
- brief_builder: partial signals -> validated DesignBrief
"""

from .models import (
    DesignBrief,
    TextSpec,
    TypographySpec,
    ColorApproach,
    AestheticSpec,
    LayoutSpec,
    StyleSpec,
    StyleSource,
    BriefContext,
    BriefMetadata,
    BriefContractError,
    TrendSignal,
    TextLayout,
    UserOverrides
)

from .tables import (
    BriefTables,
    DEFAULT_TABLES,
    ToneEnrichment,
    TONE_STYLE_ENRICHMENTS
)

from .context_detection import (
    extract_niche_from_topic,
    detect_seasonal,
    detect_cross_niche
)

from .resolvers import (
    BriefInputs,
    resolve,
    extract_keywords,
    text_only_decision
)

from .brief_builder import (
    DesignBriefBuilder,
    BriefPolicy,
    enforce_text_length,
    create_brief_builder
)

__all__ = [
    # Contract
    "DesignBrief",
    "TextSpec",
    "TypographySpec",
    "ColorApproach",
    "AestheticSpec",
    "LayoutSpec",
    "StyleSpec",
    "StyleSource",
    "BriefContext",
    "BriefMetadata",
    "BriefContractError",
    # Inputs
    "TrendSignal",
    "TextLayout",
    "UserOverrides",
    # Tables
    "BriefTables",
    "DEFAULT_TABLES",
    "ToneEnrichment",
    "TONE_STYLE_ENRICHMENTS",
    # Detection
    "extract_niche_from_topic",
    "detect_seasonal",
    "detect_cross_niche",
    # Resolution
    "BriefInputs",
    "resolve",
    "extract_keywords",
    "text_only_decision",
    # Builder
    "DesignBriefBuilder",
    "BriefPolicy",
    "enforce_text_length",
    "create_brief_builder"
]

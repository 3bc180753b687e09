"""
Style module for merch generation.

- models: analyzed niche style profiles and research results
- niche_style_researcher: live research with stored context and write-back
"""

from .models import (
    NicheStyleProfile,
    NicheStyleResult,
    StyleResultSource,
    StoredDataMeta,
    TypographyPattern,
    ColorPalette,
    LayoutPatterns,
    IllustrationStyle,
    MoodAesthetic,
    IconUsage,
    minimal_fallback
)

from .niche_style_researcher import (
    NicheStyleResearcher,
    build_context_section,
    score_agreement,
    create_niche_style_researcher
)

__all__ = [
    # Models
    "NicheStyleProfile",
    "NicheStyleResult",
    "StyleResultSource",
    "StoredDataMeta",
    "TypographyPattern",
    "ColorPalette",
    "LayoutPatterns",
    "IllustrationStyle",
    "MoodAesthetic",
    "IconUsage",
    "minimal_fallback",
    # Researcher
    "NicheStyleResearcher",
    "build_context_section",
    "score_agreement",
    "create_niche_style_researcher"
]

"""
Brief Lookup Tables

Fixed data the brief builder consults: tone enrichments, seasonal and
cross-niche keyword tables, the topic-to-niche map, the style vocabulary
and the keyword hints for typography and mood.

The tables are immutable and bundled into a BriefTables instance that the
builder receives, so tests can swap in their own.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


@dataclass(frozen=True)
class ToneEnrichment:
    """Style hints inferred from tone when research is thin."""
    typography_hints: Tuple[str, ...]
    effects: Tuple[str, ...]
    aesthetic_keywords: Tuple[str, ...]
    icon_style: Optional[str]
    prefer_visuals: bool
    visual_reasoning: str
    mood: Optional[str] = None


TONE_STYLE_ENRICHMENTS = MappingProxyType({
    "funny": ToneEnrichment(
        typography_hints=("playful", "slightly tilted or quirky"),
        effects=("slight distress", "drop shadow", "outline"),
        aesthetic_keywords=("humorous", "attention-grabbing", "bold"),
        icon_style="playful cartoon style or emoji-like",
        prefer_visuals=True,
        visual_reasoning="Humor designs benefit from visual elements that enhance the joke",
        mood="playful and lighthearted"
    ),
    "sarcastic": ToneEnrichment(
        typography_hints=("bold impact style", "condensed"),
        effects=("halftone", "slight distress"),
        aesthetic_keywords=("edgy", "bold", "statement"),
        icon_style="ironic or subversive imagery",
        prefer_visuals=True,
        visual_reasoning="Sarcasm benefits from visual irony or emphasis elements",
        mood="dry and irreverent"
    ),
    "inspirational": ToneEnrichment(
        typography_hints=("elegant serif or clean sans", "well-spaced"),
        effects=("subtle gradient", "clean lines"),
        aesthetic_keywords=("uplifting", "refined", "motivational"),
        icon_style="minimalist symbolic (sunrise, mountain, path)",
        prefer_visuals=True,
        visual_reasoning="Inspirational messages are enhanced by symbolic imagery",
        mood="uplifting and hopeful"
    ),
    "heartfelt": ToneEnrichment(
        typography_hints=("warm serif", "handwritten touches"),
        effects=("soft shadow", "gentle curves"),
        aesthetic_keywords=("warm", "personal", "emotional"),
        icon_style="hand-drawn heart or family-themed",
        prefer_visuals=True,
        visual_reasoning="Heartfelt messages pair well with personal, warm visuals",
        mood="warm and loving"
    ),
    "proud": ToneEnrichment(
        typography_hints=("bold all-caps", "strong weight"),
        effects=("3D effect", "metallic", "shadow"),
        aesthetic_keywords=("confident", "powerful", "statement"),
        icon_style="bold emblematic or badge-style",
        prefer_visuals=True,
        visual_reasoning="Pride designs benefit from strong visual presence",
        mood="confident and bold"
    ),
    "nostalgic": ToneEnrichment(
        typography_hints=("vintage serif", "retro display"),
        effects=("distressed", "worn texture", "halftone"),
        aesthetic_keywords=("vintage", "retro", "classic"),
        icon_style="retro illustration style",
        prefer_visuals=True,
        visual_reasoning="Nostalgia is enhanced by period-appropriate visual elements",
        mood="warm and nostalgic"
    ),
    "edgy": ToneEnrichment(
        typography_hints=("gothic", "distorted", "grunge"),
        effects=("heavy distress", "drip effect", "splatter"),
        aesthetic_keywords=("rebellious", "alternative", "punk"),
        icon_style="skull, flames, or counter-culture imagery",
        prefer_visuals=True,
        visual_reasoning="Edgy designs rely heavily on visual aesthetic",
        mood="dark and rebellious"
    ),
    "professional": ToneEnrichment(
        typography_hints=("clean sans-serif", "corporate"),
        effects=("clean", "minimal"),
        aesthetic_keywords=("polished", "corporate", "minimal"),
        icon_style="simple professional icon or none",
        prefer_visuals=False,
        visual_reasoning="Professional tone can succeed with clean typography alone",
        mood="trustworthy and polished"
    ),
    "wholesome": ToneEnrichment(
        typography_hints=("rounded friendly", "warm"),
        effects=("soft edges", "subtle shadow"),
        aesthetic_keywords=("friendly", "approachable", "warm"),
        icon_style="cute simple illustration",
        prefer_visuals=True,
        visual_reasoning="Wholesome content benefits from friendly visual elements",
        mood="cheerful and friendly"
    ),
    "witty": ToneEnrichment(
        typography_hints=("smart serif", "clever layout"),
        effects=("clean with subtle flair",),
        aesthetic_keywords=("clever", "smart", "refined humor"),
        icon_style="subtle visual pun or clever icon",
        prefer_visuals=True,
        visual_reasoning="Wit is often enhanced by clever visual elements",
        mood="clever and playful"
    ),
})

DEFAULT_TONE_ENRICHMENT = ToneEnrichment(
    typography_hints=(),
    effects=("subtle depth", "clean finish"),
    aesthetic_keywords=("balanced", "appealing"),
    icon_style="simple complementary illustration",
    prefer_visuals=True,
    visual_reasoning="Most designs benefit from visual elements to stand out"
)

# Checked in order; first season with a keyword hit wins
SEASONAL_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("christmas", ("christmas", "xmas", "holiday")),
    ("halloween", ("halloween", "spooky", "witch")),
    ("valentines", ("valentine", "love")),
    ("easter", ("easter", "bunny")),
    ("mothers-day", ("mother", "mom")),
    ("fathers-day", ("father", "dad")),
    ("july-4th", ("4th of july", "fourth of july", "patriot")),
)

CROSS_NICHE_INDICATORS = MappingProxyType({
    "coffee": ("coffee", "caffeine", "espresso", "latte"),
    "wine": ("wine", "vino", "merlot", "chardonnay"),
    "beer": ("beer", "brew", "ipa", "ale"),
    "dog": ("dog", "puppy", "pup", "canine", "fur baby"),
    "cat": ("cat", "kitten", "feline", "meow"),
    "fishing": ("fish", "fishing", "angler", "bass"),
    "hunting": ("hunt", "hunting", "deer", "buck"),
    "gaming": ("game", "gaming", "gamer", "player"),
    "fitness": ("gym", "fitness", "workout", "lift"),
    "yoga": ("yoga", "namaste", "zen", "meditation"),
    "running": ("run", "running", "marathon", "jog"),
    "camping": ("camp", "camping", "tent", "outdoor"),
    "golf": ("golf", "birdie", "bogey", "tee"),
})

TOPIC_NICHE_MAP: Tuple[Tuple[str, str], ...] = (
    ("nurse", "nursing"),
    ("teacher", "teaching"),
    ("doctor", "medical"),
    ("fishing", "fishing"),
    ("hunting", "hunting"),
    ("camping", "camping"),
    ("coffee", "coffee"),
    ("dog", "dog lovers"),
    ("cat", "cat lovers"),
    ("mom", "motherhood"),
    ("dad", "fatherhood"),
    ("gaming", "gaming"),
    ("golf", "golf"),
    ("fitness", "fitness"),
    ("yoga", "yoga"),
    ("beer", "beer"),
    ("wine", "wine"),
    ("music", "music"),
    ("christmas", "christmas"),
    ("halloween", "halloween"),
)

STYLE_VOCABULARY = frozenset({
    "vintage", "retro", "modern", "minimal", "bold", "playful",
    "professional", "elegant", "rustic", "cozy", "warm", "cool",
    "edgy", "clean", "distressed", "hand-drawn", "illustrated",
    "typography", "graphic", "artistic", "simple", "detailed",
    "outdoor", "nature", "urban", "classic", "contemporary",
    "whimsical", "serious", "fun", "quirky", "sophisticated",
})

# (keyword, typography, extra effect)
VISUAL_TYPOGRAPHY_HINTS: Tuple[Tuple[str, str, Optional[str]], ...] = (
    ("vintage", "vintage serif with slight wear", "distressed"),
    ("modern", "clean modern sans-serif", None),
    ("playful", "rounded friendly sans-serif", None),
    ("retro", "retro display typeface", "shadow"),
)

USER_TYPOGRAPHY_HINTS: Tuple[Tuple[str, str, Optional[str]], ...] = (
    ("vintage", "vintage serif with character", "distressed"),
    ("minimalist", "thin clean sans-serif", None),
    ("bold", "extra bold impact style", None),
)

# (any of these keywords, mood)
MOOD_KEYWORDS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("warm", "cozy"), "warm and inviting"),
    (("bold", "energetic"), "energetic and vibrant"),
    (("calm", "minimal"), "calm and understated"),
    (("professional",), "professional and clean"),
    (("playful",), "fun and playful"),
)

# (avoid-list substring, forbidden entry)
FORBIDDEN_TYPOGRAPHY_RULES: Tuple[Tuple[str, str], ...] = (
    ("neon", "neon"),
    ("script", "script"),
    ("comic", "comic sans"),
)

FORBIDDEN_COLOR_RULES: Tuple[Tuple[str, str], ...] = (
    ("neon", "neon colors"),
    ("dark", "dark gothic colors"),
    ("rainbow", "rainbow"),
)


@dataclass(frozen=True)
class BriefTables:
    """Lookup data injected into the brief builder."""
    tone_enrichments: Mapping[str, ToneEnrichment] = field(default_factory=lambda: TONE_STYLE_ENRICHMENTS)
    default_tone_enrichment: ToneEnrichment = DEFAULT_TONE_ENRICHMENT
    seasonal_keywords: Tuple[Tuple[str, Tuple[str, ...]], ...] = SEASONAL_KEYWORDS
    cross_niche_indicators: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: CROSS_NICHE_INDICATORS)
    topic_niche_map: Tuple[Tuple[str, str], ...] = TOPIC_NICHE_MAP
    style_vocabulary: frozenset = STYLE_VOCABULARY
    visual_typography_hints: Tuple[Tuple[str, str, Optional[str]], ...] = VISUAL_TYPOGRAPHY_HINTS
    user_typography_hints: Tuple[Tuple[str, str, Optional[str]], ...] = USER_TYPOGRAPHY_HINTS
    mood_keywords: Tuple[Tuple[Tuple[str, ...], str], ...] = MOOD_KEYWORDS
    forbidden_typography_rules: Tuple[Tuple[str, str], ...] = FORBIDDEN_TYPOGRAPHY_RULES
    forbidden_color_rules: Tuple[Tuple[str, str], ...] = FORBIDDEN_COLOR_RULES

    def get_tone_enrichment(self, tone: Optional[str]) -> ToneEnrichment:
        """Exact tone match, then substring match either way, then the default entry."""
        tone_lower = (tone or "").lower().strip()
        if not tone_lower:
            return self.default_tone_enrichment

        if tone_lower in self.tone_enrichments:
            return self.tone_enrichments[tone_lower]

        for key, enrichment in self.tone_enrichments.items():
            if key in tone_lower or tone_lower in key:
                return enrichment

        return self.default_tone_enrichment


DEFAULT_TABLES = BriefTables()

"""
Brief Compliance Executor

Translates a validated DesignBrief into an image-generation prompt through
Claude, acting as a disciplined executor rather than a creative. Claude
returns the prompt and five self-assessed compliance checks through a
forced tool call:

    text preserved, typography followed, color approach followed,
    aesthetic followed, forbidden elements avoided

Overall compliance is the fraction of checks that passed; each failed
check adds one fixed warning. If the call is unavailable, fails, or
returns a malformed payload, a deterministic template prompt is built
from the brief instead. That path reports all checks true at a reduced
score (0.8), since compliance there is asserted, not verified.

Usage:
    from executor import create_design_executor

    executor = create_design_executor()
    result = executor.execute(brief)
    print(result.prompt, result.compliance.overall_score)
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from brief.models import DesignBrief
from llm.claude_client import CallStatus, ClaudeClient, create_claude_client

logger = logging.getLogger(__name__)

COMPLIANCE_CHECKS = (
    "text_preserved",
    "typography_followed",
    "color_approach_followed",
    "aesthetic_followed",
    "forbidden_elements_avoided",
)

COMPLIANCE_WARNINGS = {
    "text_preserved": "Text may not match brief exactly",
    "typography_followed": "Typography may deviate from requirements",
    "color_approach_followed": "Colors may not match palette",
    "aesthetic_followed": "Aesthetic may differ from brief",
    "forbidden_elements_avoided": "May contain forbidden elements",
}

# Tool payload key for each check
TOOL_KEYS = {
    "text_preserved": "textPreserved",
    "typography_followed": "typographyFollowed",
    "color_approach_followed": "colorApproachFollowed",
    "aesthetic_followed": "aestheticFollowed",
    "forbidden_elements_avoided": "forbiddenElementsAvoided",
}

FALLBACK_WARNING = "Used fallback prompt generation - Claude API may be unavailable"
FALLBACK_SCORE = 0.8

QUALITY_FLOOR = (
    "- DO NOT create: amateur graphics, clipart style, basic flat designs, generic stock imagery\n"
    "- DO NOT create: poorly rendered text, childish scribbles, low-effort templates\n"
    "- DO NOT create: blurry elements, pixelated graphics, MS Paint quality, default system fonts"
)

DIVIDER = "=" * 63

IMAGE_PROMPT_TOOL = {
    "name": "generate_image_prompt",
    "description": (
        "Generate a t-shirt design image prompt that EXACTLY follows the design brief. "
        "The prompt will be sent to an image generation model."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "imagePrompt": {
                "type": "string",
                "description": "The complete image generation prompt for the t-shirt design"
            },
            "compliance": {
                "type": "object",
                "properties": {
                    "textPreserved": {
                        "type": "boolean",
                        "description": "True if the exact text from the brief is used verbatim"
                    },
                    "typographyFollowed": {
                        "type": "boolean",
                        "description": "True if typography requirements are followed"
                    },
                    "colorApproachFollowed": {
                        "type": "boolean",
                        "description": "True if color palette and mood requirements are followed"
                    },
                    "aestheticFollowed": {
                        "type": "boolean",
                        "description": "True if the primary aesthetic is honored"
                    },
                    "forbiddenElementsAvoided": {
                        "type": "boolean",
                        "description": "True if all forbidden elements are avoided"
                    },
                    "complianceNotes": {
                        "type": "string",
                        "description": "Brief notes on how each requirement was addressed"
                    }
                },
                "required": [
                    "textPreserved", "typographyFollowed", "colorApproachFollowed",
                    "aestheticFollowed", "forbiddenElementsAvoided", "complianceNotes"
                ]
            }
        },
        "required": ["imagePrompt", "compliance"]
    }
}


@dataclass
class ComplianceRecord:
    """Five independent checks and their mean."""
    text_preserved: bool
    typography_followed: bool
    color_approach_followed: bool
    aesthetic_followed: bool
    forbidden_elements_avoided: bool
    overall_score: Optional[float] = None
    notes: str = ""

    def __post_init__(self):
        if self.overall_score is None:
            self.overall_score = sum(self.checks().values()) / len(COMPLIANCE_CHECKS)

    def checks(self) -> Dict[str, bool]:
        return {name: getattr(self, name) for name in COMPLIANCE_CHECKS}

    def warnings(self) -> List[str]:
        """One fixed warning per failed check, in check order."""
        return [COMPLIANCE_WARNINGS[name] for name, passed in self.checks().items() if not passed]

    @classmethod
    def from_tool_payload(cls, data: Any) -> Optional["ComplianceRecord"]:
        """Coerce the tool's compliance object; None if any check is missing or not a bool."""
        if not isinstance(data, dict):
            return None
        values = {}
        for name, key in TOOL_KEYS.items():
            value = data.get(key)
            if not isinstance(value, bool):
                return None
            values[name] = value
        notes = data.get("complianceNotes")
        return cls(notes=notes if isinstance(notes, str) else "", **values)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.checks())
        data["overall_score"] = self.overall_score
        data["notes"] = self.notes
        return data


@dataclass
class DesignExecutionResult:
    """Outcome of executing a brief."""
    success: bool
    prompt: str
    compliance: ComplianceRecord
    warnings: List[str] = field(default_factory=list)
    error: Optional[str] = None
    used_fallback: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "prompt": self.prompt,
            "compliance": self.compliance.to_dict(),
            "warnings": list(self.warnings),
            "error": self.error,
            "used_fallback": self.used_fallback
        }


def build_compliance_requirements(brief: DesignBrief) -> List[str]:
    """Checklist the executor must satisfy."""
    style = brief.style
    requirements = [
        f'Text "{brief.text.exact}" appears EXACTLY as specified',
        f"Typography is {style.typography.required}",
        f"Color palette includes: {', '.join(style.color_approach.palette)}",
        f"Overall aesthetic is: {style.aesthetic.primary}",
        f"Composition follows: {style.layout.composition}",
    ]
    if style.typography.forbidden:
        requirements.append(f"Typography does NOT include: {', '.join(style.typography.forbidden)}")
    if style.color_approach.forbidden:
        requirements.append(f"Colors do NOT include: {', '.join(style.color_approach.forbidden)}")
    if style.aesthetic.forbidden:
        requirements.append(f"Aesthetic is NOT: {', '.join(style.aesthetic.forbidden)}")
    return requirements


def _lines(*lines: Optional[str]) -> str:
    return "\n".join(line for line in lines if line)


def build_executor_prompt(brief: DesignBrief, requirements: List[str]) -> str:
    """Directive handed to Claude with the full brief and checklist."""
    text = brief.text.exact
    typography = brief.style.typography
    colors = brief.style.color_approach
    aesthetic = brief.style.aesthetic
    layout = brief.style.layout
    context = brief.context

    brief_section = "\n\n".join([
        _lines(
            "TEXT (MANDATORY - USE EXACTLY):",
            f'"{text}"',
            "(Preserve original casing)" if brief.text.preserve_case else None,
            f"(Maximum length: {brief.text.max_length} characters)" if brief.text.max_length else None,
        ),
        _lines(
            "TYPOGRAPHY (MANDATORY):",
            f"- Required: {typography.required}",
            f"- Weight: {typography.weight}" if typography.weight else None,
            f"- Effects: {', '.join(typography.effects)}" if typography.effects else None,
            f"- FORBIDDEN: {', '.join(typography.forbidden)}" if typography.forbidden else None,
        ),
        _lines(
            "COLOR APPROACH (MANDATORY):",
            f"- Palette: {', '.join(colors.palette)}",
            f"- Mood: {colors.mood}",
            f"- Shirt Color: {colors.shirt_color}",
            f"- FORBIDDEN: {', '.join(colors.forbidden)}" if colors.forbidden else None,
        ),
        _lines(
            "AESTHETIC (MANDATORY):",
            f"- Primary: {aesthetic.primary}",
            f"- Keywords: {', '.join(aesthetic.keywords)}",
            f"- Reference: {aesthetic.reference}" if aesthetic.reference else None,
            f"- FORBIDDEN: {', '.join(aesthetic.forbidden)}" if aesthetic.forbidden else None,
        ),
        _lines(
            "LAYOUT (MANDATORY):",
            f"- Composition: {layout.composition}",
            f"- Text Placement: {layout.text_placement}",
            f"- Include Icon: {'yes' if layout.include_icon else 'no (typography only)'}",
            f"- Icon Style: {layout.icon_style}" if layout.icon_style else None,
        ),
        _lines(
            "CONTEXT:",
            f"- Niche: {context.niche}",
            f"- Audience: {context.audience_description}",
            f"- Tone: {context.tone}",
            f"- Seasonal: {context.seasonal_modifier}" if context.seasonal_modifier else None,
            f"- Cross-Niche Blend: {' + '.join(context.cross_niche_blend)}" if context.cross_niche_blend else None,
        ),
    ])

    checklist = "\n".join(f"{i}. {req}" for i, req in enumerate(requirements, 1))

    return f"""You are a DESIGN EXECUTOR. Your job is to translate a Design Brief into an image generation prompt.

CRITICAL RULES:
1. You are a disciplined executor, NOT a creative. All creative decisions have been made.
2. You MUST follow the brief EXACTLY - no improvisation, no "improvements"
3. The text "{text}" MUST appear in the prompt VERBATIM
4. Every style requirement is MANDATORY, not a suggestion
5. Forbidden elements are STRICTLY prohibited

{DIVIDER}
DESIGN BRIEF
{DIVIDER}

{brief_section}

{DIVIDER}
COMPLIANCE CHECKLIST
{DIVIDER}

{checklist}

{DIVIDER}
OUTPUT REQUIREMENTS
{DIVIDER}

Generate an image prompt for a t-shirt design that:

TECHNICAL REQUIREMENTS:
1. Is suitable for print-on-demand (transparent background preferred)
2. Works on a {colors.shirt_color} t-shirt with high contrast
3. Has the text "{text}" as the PRIMARY, FIRST element mentioned in the prompt
4. Follows ALL style requirements from the brief above
5. Avoids ALL forbidden elements

QUALITY FLOOR (MINIMUM STANDARDS):
The prompt must include these negative constraints to avoid low-quality output:
{QUALITY_FLOOR}

RESEARCH DATA PRIORITY:
- The style requirements above come from market research
- DO NOT override or "enhance" the research data with generic quality instructions
- If the research says "vintage distressed" - use that, don't add "3D effects"
- If the research says "minimalist clean" - honor that, don't add "gradients and shadows"

PROMPT STRUCTURE (MANDATORY):
1. Text requirement MUST come FIRST (loudest part of prompt)
2. Style direction follows the brief EXACTLY
3. Quality floor constraints come LAST as negative/avoid instructions

REMEMBER: You are an EXECUTOR, not a creative director. The brief IS the creative direction."""


def build_fallback_prompt(brief: DesignBrief) -> str:
    """Deterministic text-first prompt built straight from the brief."""
    style = brief.style
    avoid_style = (
        f"Style: {', '.join(style.aesthetic.forbidden)}." if style.aesthetic.forbidden else None
    )
    return "\n\n".join([
        (f'TEXT REQUIREMENT (MANDATORY - EXACT): T-shirt design with the text "{brief.text.exact}" '
         f"- this text must be clearly readable and is the primary element."),
        _lines(
            f"STYLE: {style.aesthetic.primary}",
            f"TYPOGRAPHY: {style.typography.required}",
            f"COLORS: {', '.join(style.color_approach.palette)}",
            f"MOOD: {style.color_approach.mood}",
            f"LAYOUT: {style.layout.composition}",
        ),
        f"For {brief.context.niche} audience. Tone: {brief.context.tone}.",
        _lines(
            "QUALITY FLOOR (AVOID):",
            avoid_style,
            ("DO NOT create: amateur graphics, clipart style, basic flat designs, poorly rendered text, "
             "blurry elements, pixelated graphics, MS Paint quality, default system fonts."),
        ),
        f"Print-ready, transparent background, suitable for {style.color_approach.shirt_color} shirt.",
    ])


class BriefComplianceExecutor:
    """Executes design briefs through Claude with a template fallback."""

    def __init__(self, llm: Optional[ClaudeClient] = None, fallback_score: float = FALLBACK_SCORE):
        """
        Args:
            llm: Claude client (None or unavailable = always fallback)
            fallback_score: Overall score reported on the fallback path
        """
        self.llm = llm
        self.fallback_score = fallback_score

    def execute(self, brief: DesignBrief) -> DesignExecutionResult:
        """
        Turn a brief into an image prompt.

        Never raises for collaborator problems; the fallback covers them.
        """
        logger.info("Executing brief for: '%s'", brief.text.exact)
        logger.info("Style source: %s, confidence: %.2f", brief.style.source.value, brief.style.confidence)

        if self.llm is None or not self.llm.available:
            return self.fallback(brief, "Claude client unavailable")

        requirements = build_compliance_requirements(brief)
        response = self.llm.call_tool(
            build_executor_prompt(brief, requirements),
            IMAGE_PROMPT_TOOL,
            max_tokens=2048
        )
        if response.status != CallStatus.OK:
            logger.error("Brief execution failed (%s): %s", response.status.value, response.error)
            return self.fallback(brief, response.error)

        prompt = response.input.get("imagePrompt")
        compliance = ComplianceRecord.from_tool_payload(response.input.get("compliance"))
        if not isinstance(prompt, str) or not prompt.strip() or compliance is None:
            logger.error("Malformed generate_image_prompt payload")
            return self.fallback(brief, "Malformed generate_image_prompt payload")

        warnings = compliance.warnings()
        logger.info("Compliance score: %.0f%%", compliance.overall_score * 100)
        if warnings:
            logger.warning("Compliance warnings: %s", ", ".join(warnings))

        return DesignExecutionResult(
            success=True,
            prompt=prompt.strip(),
            compliance=compliance,
            warnings=warnings
        )

    def fallback(self, brief: DesignBrief, error: Optional[str] = None) -> DesignExecutionResult:
        logger.warning("Using fallback prompt generation")
        return DesignExecutionResult(
            success=True,
            prompt=build_fallback_prompt(brief),
            compliance=ComplianceRecord(
                text_preserved=True,
                typography_followed=True,
                color_approach_followed=True,
                aesthetic_followed=True,
                forbidden_elements_avoided=True,
                overall_score=self.fallback_score
            ),
            warnings=[FALLBACK_WARNING],
            error=error,
            used_fallback=True
        )


def create_design_executor(api_key: Optional[str] = None) -> BriefComplianceExecutor:
    """Executor backed by a Claude client from the environment."""
    return BriefComplianceExecutor(llm=create_claude_client(api_key=api_key))

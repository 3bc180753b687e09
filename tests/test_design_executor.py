"""
Unit Tests for the Brief Compliance Executor
Tests prompt construction, compliance scoring, warnings and fallback
"""

import pytest
import sys
from pathlib import Path

# Add scripts directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "scripts"))

from brief.brief_builder import DesignBriefBuilder
from brief.models import TrendSignal
from executor.design_executor import (
    COMPLIANCE_WARNINGS,
    FALLBACK_WARNING,
    IMAGE_PROMPT_TOOL,
    BriefComplianceExecutor,
    ComplianceRecord,
    build_compliance_requirements,
    build_executor_prompt,
    build_fallback_prompt
)
from style.models import NicheStyleProfile


def payload(text=True, typography=True, colors=True, aesthetic=True, forbidden=True,
            prompt="  \"Coffee Then Adulting\" in bold playful letters  "):
    return {
        "imagePrompt": prompt,
        "compliance": {
            "textPreserved": text,
            "typographyFollowed": typography,
            "colorApproachFollowed": colors,
            "aestheticFollowed": aesthetic,
            "forbiddenElementsAvoided": forbidden,
            "complianceNotes": "Followed the brief"
        }
    }


# ===================
# Fixtures
# ===================

@pytest.fixture
def brief():
    """A complete brief for the coffee phrase."""
    return DesignBriefBuilder().build_brief(TrendSignal(design_text="Coffee Then Adulting", niche="coffee"))


@pytest.fixture
def fishing_brief():
    """A brief with forbidden elements."""
    profile = NicheStyleProfile.from_dict({
        "dominantTypography": {"primary": "rugged slab serif"},
        "moodAesthetic": {"primary": "rustic outdoor", "avoid": ["neon colors"]}
    })
    return DesignBriefBuilder().build_brief(
        TrendSignal(design_text="Lake Life", niche="fishing"),
        niche_style=profile
    )


def assert_fallback(result):
    assert result.success
    assert result.used_fallback
    assert result.compliance.overall_score == 0.8
    assert all(result.compliance.checks().values())
    assert result.warnings == [FALLBACK_WARNING]


# ===================
# Compliance Record Tests
# ===================

class TestComplianceRecord:
    """Test compliance scoring."""

    def test_score_is_mean(self):
        """Test overall score is the fraction of passed checks."""
        record = ComplianceRecord(True, True, False, True, True)
        assert record.overall_score == pytest.approx(0.8)
        assert ComplianceRecord(True, True, True, True, True).overall_score == 1.0
        assert ComplianceRecord(False, False, False, False, False).overall_score == 0.0

    def test_one_warning_per_failed_check(self):
        """Test warnings follow check order."""
        record = ComplianceRecord(False, True, False, True, True)
        assert record.warnings() == [
            "Text may not match brief exactly",
            "Colors may not match palette"
        ]

    def test_all_warning_texts(self):
        """Test the fixed warning wording."""
        record = ComplianceRecord(False, False, False, False, False)
        assert record.warnings() == [
            "Text may not match brief exactly",
            "Typography may deviate from requirements",
            "Colors may not match palette",
            "Aesthetic may differ from brief",
            "May contain forbidden elements"
        ]
        assert len(COMPLIANCE_WARNINGS) == 5

    def test_from_payload_requires_booleans(self):
        """Test missing or non-boolean checks are rejected."""
        assert ComplianceRecord.from_tool_payload(payload()["compliance"]) is not None
        assert ComplianceRecord.from_tool_payload({"textPreserved": True}) is None
        bad = dict(payload()["compliance"], typographyFollowed="yes")
        assert ComplianceRecord.from_tool_payload(bad) is None
        assert ComplianceRecord.from_tool_payload(None) is None


# ===================
# Prompt Construction Tests
# ===================

class TestPrompts:
    """Test executor and fallback prompts."""

    def test_requirements(self, fishing_brief):
        """Test the checklist covers text, style and forbidden lists."""
        requirements = build_compliance_requirements(fishing_brief)
        assert requirements[0] == 'Text "Lake Life" appears EXACTLY as specified'
        assert "Typography is rugged slab serif" in requirements
        assert "Colors do NOT include: neon colors" in requirements
        assert "Aesthetic is NOT: neon colors" in requirements

    def test_executor_prompt(self, brief):
        """Test the directive frames Claude as an executor."""
        prompt = build_executor_prompt(brief, build_compliance_requirements(brief))
        assert "DESIGN EXECUTOR" in prompt
        assert "disciplined executor, NOT a creative" in prompt
        assert '"Coffee Then Adulting"' in prompt
        assert "COMPLIANCE CHECKLIST" in prompt
        assert "QUALITY FLOOR" in prompt
        assert "- Shirt Color: black" in prompt

    def test_fallback_prompt_text_first(self, brief):
        """Test the fallback prompt leads with the exact text."""
        prompt = build_fallback_prompt(brief)
        assert prompt.startswith('TEXT REQUIREMENT (MANDATORY - EXACT): T-shirt design with the text '
                                 '"Coffee Then Adulting"')
        assert "For coffee audience. Tone: funny." in prompt
        assert "suitable for black shirt" in prompt

    def test_fallback_prompt_forbidden_style(self, fishing_brief):
        """Test forbidden aesthetics appear in the avoid block."""
        assert "Style: neon colors." in build_fallback_prompt(fishing_brief)


# ===================
# Execution Tests
# ===================

class TestExecute:
    """Test execution through the tool call."""

    def test_compliant_execution(self, brief, scripted_claude):
        """Test a fully compliant tool call."""
        llm = scripted_claude(payload())
        result = BriefComplianceExecutor(llm=llm).execute(brief)

        assert result.success
        assert not result.used_fallback
        assert result.prompt == "\"Coffee Then Adulting\" in bold playful letters"
        assert result.compliance.overall_score == 1.0
        assert result.warnings == []
        assert result.compliance.notes == "Followed the brief"

    def test_tool_forced(self, brief, scripted_claude):
        """Test the request forces the image prompt tool."""
        llm = scripted_claude(payload())
        BriefComplianceExecutor(llm=llm).execute(brief)

        call = llm._client.messages.calls[0]
        assert call["tools"] == [IMAGE_PROMPT_TOOL]
        assert call["tool_choice"] == {"type": "tool", "name": "generate_image_prompt"}
        assert "Coffee Then Adulting" in call["messages"][0]["content"]

    def test_one_failed_check(self, brief, scripted_claude):
        """Test one failed check scores 0.8 with exactly one warning."""
        llm = scripted_claude(payload(colors=False))
        result = BriefComplianceExecutor(llm=llm).execute(brief)

        assert result.success
        assert result.compliance.overall_score == pytest.approx(0.8)
        assert result.warnings == ["Colors may not match palette"]
        assert not result.used_fallback

    def test_fallback_without_client(self, brief):
        """Test no client means the fallback prompt."""
        result = BriefComplianceExecutor().execute(brief)
        assert_fallback(result)
        assert "Coffee Then Adulting" in result.prompt

    def test_fallback_when_unavailable(self, brief, offline_claude):
        """Test an unconfigured client means the fallback prompt."""
        assert_fallback(BriefComplianceExecutor(llm=offline_claude).execute(brief))

    def test_fallback_on_call_failure(self, brief, scripted_claude):
        """Test an API error means the fallback prompt."""
        llm = scripted_claude(RuntimeError("overloaded"))
        result = BriefComplianceExecutor(llm=llm).execute(brief)
        assert_fallback(result)
        assert result.error == "overloaded"

    def test_fallback_on_text_reply(self, brief, scripted_claude):
        """Test a reply without the tool call means the fallback prompt."""
        llm = scripted_claude("Here is your prompt: a shirt")
        assert_fallback(BriefComplianceExecutor(llm=llm).execute(brief))

    def test_fallback_on_malformed_payload(self, brief, scripted_claude):
        """Test non-boolean checks mean the fallback prompt."""
        bad = payload()
        bad["compliance"]["textPreserved"] = "true"
        assert_fallback(BriefComplianceExecutor(llm=scripted_claude(bad)).execute(brief))

    def test_fallback_on_empty_prompt(self, brief, scripted_claude):
        """Test an empty image prompt means the fallback prompt."""
        llm = scripted_claude(payload(prompt="   "))
        assert_fallback(BriefComplianceExecutor(llm=llm).execute(brief))

    def test_custom_fallback_score(self, brief):
        """Test the fallback score is configurable."""
        result = BriefComplianceExecutor(fallback_score=0.5).execute(brief)
        assert result.compliance.overall_score == 0.5

    def test_to_dict(self, brief):
        """Test serialization."""
        data = BriefComplianceExecutor().execute(brief).to_dict()
        assert data["success"] is True
        assert data["warnings"] == [FALLBACK_WARNING]

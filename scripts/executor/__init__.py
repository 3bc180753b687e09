"""
Executor module for merch generation.

- design_executor: DesignBrief -> image prompt with compliance scoring
"""

from .design_executor import (
    BriefComplianceExecutor,
    ComplianceRecord,
    DesignExecutionResult,
    COMPLIANCE_WARNINGS,
    FALLBACK_WARNING,
    IMAGE_PROMPT_TOOL,
    build_compliance_requirements,
    build_executor_prompt,
    build_fallback_prompt,
    create_design_executor
)

__all__ = [
    "BriefComplianceExecutor",
    "ComplianceRecord",
    "DesignExecutionResult",
    "COMPLIANCE_WARNINGS",
    "FALLBACK_WARNING",
    "IMAGE_PROMPT_TOOL",
    "build_compliance_requirements",
    "build_executor_prompt",
    "build_fallback_prompt",
    "create_design_executor"
]

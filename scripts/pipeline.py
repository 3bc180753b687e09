"""
Merch Generation Pipeline

One generation request, end to end:

1. Explore for a fresh (niche, phrase) unless the caller supplied text
2. Fixed-template fallback when exploration finds nothing
3. Build the design brief (all fields resolved, validated)
4. Execute the brief into an image prompt with compliance scoring
5. Record the outcome in generation history (fire-and-forget)

A wall-clock budget is checked between stages. When it runs out the
outcome comes back with partial=True and whatever stages completed.
History is only recorded after execution completes.

Usage:
    from pipeline import create_pipeline, GenerationRequest

    pipeline = create_pipeline()
    outcome = pipeline.run(GenerationRequest(user_id="user-1", risk_level=60))
    print(outcome.execution.prompt)
"""

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, List, Optional

from brief.brief_builder import DesignBriefBuilder
from brief.models import DesignBrief, TrendSignal, UserOverrides
from executor.design_executor import BriefComplianceExecutor, DesignExecutionResult
from explore.exploration import ExplorationOrchestrator, ExplorationResult, create_exploration_orchestrator
from llm.claude_client import create_claude_client
from search.perplexity_search import PerplexitySearch
from settings import Settings, load_settings
from storage.generation_history import GenerationHistoryStore, HistoryRecorder
from storage.niche_style_store import NicheStyleStore
from style.models import NicheStyleProfile
from style.niche_style_researcher import NicheStyleResearcher

logger = logging.getLogger(__name__)


class Stage:
    EXPLORE = "explore"
    BRIEF = "brief"
    EXECUTE = "execute"
    RECORD = "record"


@dataclass
class GenerationRequest:
    """What the caller asks for. Everything is optional."""
    user_id: Optional[str] = None
    risk_level: int = 50
    force_exploration: bool = False
    exclude_niches: List[str] = field(default_factory=list)
    text: Optional[str] = None
    niche: Optional[str] = None
    style: Optional[str] = None
    tone: Optional[str] = None
    trend: Optional[TrendSignal] = None
    niche_style: Optional[NicheStyleProfile] = None


@dataclass
class GenerationOutcome:
    """Whatever the pipeline produced for one request."""
    request: GenerationRequest
    exploration: Optional[ExplorationResult] = None
    brief: Optional[DesignBrief] = None
    execution: Optional[DesignExecutionResult] = None
    used_template_fallback: bool = False
    partial: bool = False
    stages_completed: List[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def prompt(self) -> Optional[str]:
        return self.execution.prompt if self.execution else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exploration": self.exploration.to_dict() if self.exploration else None,
            "brief": self.brief.to_dict() if self.brief else None,
            "execution": self.execution.to_dict() if self.execution else None,
            "used_template_fallback": self.used_template_fallback,
            "partial": self.partial,
            "stages_completed": list(self.stages_completed),
            "elapsed_seconds": round(self.elapsed_seconds, 3)
        }


class GenerationPipeline:
    """Explore -> brief -> execute -> record, under a time budget."""

    def __init__(
        self,
        orchestrator: ExplorationOrchestrator,
        builder: DesignBriefBuilder,
        executor: BriefComplianceExecutor,
        recorder: Optional[HistoryRecorder] = None,
        time_budget_seconds: float = 180.0,
        clock: Callable[[], float] = time.monotonic
    ):
        self.orchestrator = orchestrator
        self.builder = builder
        self.executor = executor
        self.recorder = recorder
        self.time_budget_seconds = time_budget_seconds
        self.clock = clock

    def run(self, request: GenerationRequest) -> GenerationOutcome:
        """
        Run one generation.

        Returns:
            GenerationOutcome (partial=True when the budget ran out)
        """
        start = self.clock()
        outcome = GenerationOutcome(request=request)

        def finish(partial: bool = False) -> GenerationOutcome:
            outcome.partial = partial
            outcome.elapsed_seconds = self.clock() - start
            if partial:
                logger.warning(
                    "Time budget of %.0fs exceeded after %s",
                    self.time_budget_seconds, ", ".join(outcome.stages_completed) or "no stages"
                )
            return outcome

        def over_budget() -> bool:
            return self.clock() - start >= self.time_budget_seconds

        trend = self._trend_for(request, outcome)
        outcome.stages_completed.append(Stage.EXPLORE)
        if over_budget():
            return finish(partial=True)

        outcome.brief = self.builder.build_brief(
            trend,
            niche_style=request.niche_style,
            user_overrides=UserOverrides(text=request.text, style=request.style, tone=request.tone)
        )
        outcome.stages_completed.append(Stage.BRIEF)
        if over_budget():
            return finish(partial=True)

        outcome.execution = self.executor.execute(outcome.brief)
        outcome.stages_completed.append(Stage.EXECUTE)

        if self.recorder is not None and outcome.execution.success:
            self.recorder.record(
                user_id=request.user_id,
                phrase=outcome.brief.text.exact,
                niche=outcome.brief.context.niche,
                topic=trend.topic or outcome.brief.context.niche,
                risk_level=request.risk_level
            )
            outcome.stages_completed.append(Stage.RECORD)

        return finish()

    def _trend_for(self, request: GenerationRequest, outcome: GenerationOutcome) -> TrendSignal:
        base = request.trend or TrendSignal()

        if request.text or base.design_text or base.phrase:
            niche = request.niche or base.niche
            return replace(base, niche=niche, topic=base.topic or niche)

        result = self.orchestrator.explore(
            user_id=request.user_id,
            risk_level=request.risk_level,
            force_exploration=request.force_exploration,
            exclude_niches=request.exclude_niches
        )

        if result is None:
            config = self.orchestrator.config
            niche = request.niche or config.fallback_niche
            logger.warning("Exploration found nothing, using template phrase for '%s'", niche)
            outcome.used_template_fallback = True
            return replace(
                base,
                design_text=config.fallback_phrase,
                phrase=config.fallback_phrase,
                niche=niche,
                topic=base.topic or niche
            )

        outcome.exploration = result
        return replace(
            base,
            design_text=result.phrase,
            phrase=result.phrase,
            niche=result.niche,
            topic=result.topic
        )

    def close(self):
        if self.recorder is not None:
            self.recorder.close()


def create_pipeline(settings: Optional[Settings] = None) -> GenerationPipeline:
    """Pipeline wired to SQLite history, Claude and Perplexity from settings."""
    settings = settings or load_settings()

    history = GenerationHistoryStore(db_path=settings.db_path)
    llm = create_claude_client(api_key=settings.anthropic_api_key, model=settings.claude_model)
    searcher = None
    if settings.has_perplexity:
        searcher = PerplexitySearch(api_key=settings.perplexity_api_key, model=settings.perplexity_model)

    return GenerationPipeline(
        orchestrator=create_exploration_orchestrator(history_store=history, llm=llm),
        builder=DesignBriefBuilder(
            style_researcher=NicheStyleResearcher(
                searcher=searcher,
                store=NicheStyleStore(db_path=settings.db_path)
            )
        ),
        executor=BriefComplianceExecutor(llm=llm),
        recorder=HistoryRecorder(history),
        time_budget_seconds=settings.time_budget_seconds
    )

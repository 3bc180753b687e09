"""
Merch Runner - command-line entry point

Generates one design concept (niche, phrase, brief, image prompt) or
prints generation history statistics.

Usage:
    python merch_runner.py --user alice --risk 60
    python merch_runner.py --text "Coffee Then Adulting" --tone sarcastic --json
    python merch_runner.py --stats
"""

# Path setup for distribution package
import sys
from pathlib import Path
_SCRIPT_DIR = Path(__file__).parent.resolve()
if str(_SCRIPT_DIR) not in sys.path:
    sys.path.insert(0, str(_SCRIPT_DIR))

import argparse
import json

from pipeline import GenerationOutcome, GenerationRequest, create_pipeline
from settings import configure_logging, load_settings
from storage.generation_history import GenerationHistoryStore


def print_outcome(outcome: GenerationOutcome):
    """Banner-style summary of one generation."""
    print(f"\n{'='*60}")
    print("MERCH DESIGN CONCEPT")
    print(f"{'='*60}")

    if outcome.exploration:
        exploration = outcome.exploration
        score = exploration.diversity_score
        print(f"Niche:      {exploration.niche} ({exploration.source.value})")
        print(f"Phrase:     {exploration.phrase}")
        print(f"Diversity:  {score.overall:.2f} ({score.recommendation.value})"
              f" | niche {score.niche_novelty:.2f}, phrase {score.phrase_novelty:.2f},"
              f" topic {score.topic_novelty:.2f}")
        print(f"Confidence: {exploration.confidence:.2f} after {exploration.attempts} attempt(s)"
              f"{' [degraded]' if exploration.degraded else ''}")
    elif outcome.used_template_fallback:
        print("Exploration found nothing - used template phrase")

    if outcome.brief:
        brief = outcome.brief
        style = brief.style
        print(f"\nBrief {brief.metadata.brief_id}")
        print(f"  Text:        \"{brief.text.exact}\"")
        print(f"  Niche/tone:  {brief.context.niche} / {brief.context.tone}")
        if brief.context.seasonal_modifier:
            print(f"  Seasonal:    {brief.context.seasonal_modifier}")
        if brief.context.cross_niche_blend:
            print(f"  Blend:       {' + '.join(brief.context.cross_niche_blend)}")
        print(f"  Style:       {style.source.value} ({style.confidence:.2f})")
        print(f"  Typography:  {style.typography.required}")
        print(f"  Palette:     {', '.join(style.color_approach.palette)} on {style.color_approach.shirt_color}")
        print(f"  Mood:        {style.color_approach.mood}")
        print(f"  Aesthetic:   {style.aesthetic.primary}")
        print(f"  Layout:      {style.layout.composition}"
              f"{' + ' + style.layout.icon_style if style.layout.include_icon else ' (text only)'}")

    if outcome.execution:
        execution = outcome.execution
        print(f"\nCompliance: {execution.compliance.overall_score:.0%}"
              f"{' (fallback prompt)' if execution.used_fallback else ''}")
        for warning in execution.warnings:
            print(f"  ! {warning}")
        print(f"\nPrompt:\n{execution.prompt}")

    if outcome.partial:
        print(f"\nPARTIAL RESULT - time budget exceeded after: {', '.join(outcome.stages_completed)}")

    print(f"{'='*60}")
    print(f"Completed in {outcome.elapsed_seconds:.1f}s\n")


def print_stats(db_path: str):
    stats = GenerationHistoryStore(db_path=db_path).get_stats()
    print(f"\n{'='*60}")
    print("GENERATION HISTORY")
    print(f"{'='*60}")
    print(f"Database:          {stats['db_path']}")
    print(f"Total generations: {stats['total_generations']}")
    print(f"Unique niches:     {stats['unique_niches']}")
    print(f"Users:             {stats['users']}")
    if stats["top_niches"]:
        print("Top niches:")
        for row in stats["top_niches"]:
            print(f"  {row['niche']}: {row['uses']}")
    print(f"{'='*60}\n")


def main():
    """CLI interface."""
    parser = argparse.ArgumentParser(
        description="Merch design generation - diversity-aware niche exploration and design briefs"
    )
    parser.add_argument(
        "--user", "-u",
        type=str,
        default=None,
        help="User scope for history and cooldowns (default: global)"
    )
    parser.add_argument(
        "--risk", "-r",
        type=int,
        default=50,
        help="Risk level 0-100 (default: 50)"
    )
    parser.add_argument(
        "--explore", "-e",
        action="store_true",
        help="Force exploration of unfamiliar niches"
    )
    parser.add_argument(
        "--exclude",
        type=str,
        nargs="+",
        default=[],
        help="Niches to keep out of exploration"
    )
    parser.add_argument(
        "--text", "-t",
        type=str,
        default=None,
        help="Exact design text (skips exploration)"
    )
    parser.add_argument(
        "--niche", "-n",
        type=str,
        default=None,
        help="Niche for supplied text"
    )
    parser.add_argument(
        "--style", "-s",
        type=str,
        default=None,
        help="Style preference (e.g., 'vintage', 'minimalist', 'bold')"
    )
    parser.add_argument(
        "--tone",
        type=str,
        default=None,
        help="Tone (e.g., funny, sarcastic, heartfelt, professional)"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show generation history statistics and exit"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args()

    settings = load_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.stats:
        print_stats(settings.db_path)
        return

    if not 0 <= args.risk <= 100:
        parser.error("--risk must be between 0 and 100")

    request = GenerationRequest(
        user_id=args.user,
        risk_level=args.risk,
        force_exploration=args.explore,
        exclude_niches=args.exclude,
        text=args.text,
        niche=args.niche,
        style=args.style,
        tone=args.tone
    )

    if not args.json:
        print(f"\n{'='*60}")
        print("MERCH RUNNER")
        print(f"{'='*60}")
        print(f"User: {args.user or 'global'} | Risk: {args.risk} | "
              f"Exploration: {'forced' if args.explore else 'auto'}")
        print(f"Claude: {'configured' if settings.has_claude else 'NOT configured (fallbacks)'}")
        print(f"Perplexity: {'configured' if settings.has_perplexity else 'NOT configured (minimal style)'}")
        print(f"{'='*60}")

    pipeline = create_pipeline(settings)
    try:
        outcome = pipeline.run(request)
    finally:
        pipeline.close()

    if args.json:
        print(json.dumps(outcome.to_dict(), indent=2, default=str))
    else:
        print_outcome(outcome)


if __name__ == "__main__":
    main()

"""Reference problem/cause map: two trees facing each other."""

from __future__ import annotations

from .hierarchy import CauseSpec, Hierarchy, SubSpec, TreeSpec


def _cause(label: str, *subs: str) -> CauseSpec:
    return CauseSpec(label, tuple(SubSpec(s) for s in subs))


INSPIRATION_BLOCKAGE = TreeSpec(
    label="Inspiration Blockage",
    position=(580.0, 500.0),
    arc=(-160.0, 160.0),
    causes=(
        _cause(
            "Time Scarcity",
            "Solo creator juggling tasks",
            "No batching workflow",
            "Not leveraging automation (script→video)",
        ),
        _cause(
            "Analysis Paralysis",
            "Too many format options",
            "No presets / brand guardrails",
            "Not using Smart Posting guidance",
        ),
        _cause(
            "Low Trend Visibility",
            "Not using community template board",
            "No competitor/trend scan",
            "Platform changes unnoticed",
        ),
        _cause(
            "Burnout / Fear",
            "Perfectionism & over-editing",
            "On-camera anxiety",
            "No scripts/prompts to start",
        ),
        _cause(
            "Weak Feedback Loop",
            "Not reviewing analytics",
            "No A/B tests",
            "Ignoring engagement insights",
        ),
    ),
)

LOW_ENGAGEMENT_SCORE = TreeSpec(
    label="Low Engagement Score",
    position=(1620.0, 500.0),
    arc=(20.0, 340.0),
    causes=(
        _cause("Weak Hook (first 3s)", "Slow opening", "Unclear promise", "No pattern interrupt"),
        _cause(
            "Poor Retention Structure",
            "Not using AI clipping",
            "Sparse B-roll / reframing",
            "Meandering script",
        ),
        _cause(
            "Visual / Readability",
            "Subtitle color contrast off",
            "Missing keyword highlighting",
            "Character positioning clashes with overlays",
        ),
        _cause("Audio / Background", "Music too loud", "Mood mismatch", "Low mic quality"),
        _cause(
            "Format / Timing Mismatch",
            "Wrong aspect ratio",
            "Length off for platform",
            "Posting at off-peak times (not scheduled)",
        ),
        _cause(
            "Ignoring Data",
            "Not leveraging Smart Posting scoring",
            "Small sample size",
            "Not comparing like-with-like features",
        ),
        _cause(
            "Asset Quality",
            "Generic / repetitive background video",
            "Low-resolution assets",
            "No branded cover/frame",
        ),
    ),
)

REFERENCE_HIERARCHY = Hierarchy((INSPIRATION_BLOCKAGE, LOW_ENGAGEMENT_SCORE))

from .stats import (
    contribution_stats,
    course_summary,
    hole_learning_progress,
    hole_total_samples,
)
from .visualizations import plot_hole_knowledge

__all__ = [
    "contribution_stats",
    "course_summary",
    "hole_learning_progress",
    "hole_total_samples",
    "plot_hole_knowledge",
]

"""Value Hierarchy.

Maintain a ranked list of personal values in a portable CSV file and refine
the ranking through pairwise comparisons collected during interviews.
"""

from value_hierarchy.models import ValueRecord
from value_hierarchy.ranking import apply_outcomes, parse_outcomes, select_pairs
from value_hierarchy.services.storage import ValueStore

__version__ = "0.1.0"
__all__ = [
    "ValueRecord",
    "ValueStore",
    "__version__",
    "apply_outcomes",
    "parse_outcomes",
    "select_pairs",
]

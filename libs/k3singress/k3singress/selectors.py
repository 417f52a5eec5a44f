"""
Label selector encoding for the router's environment.

The router reads NAMESPACE_LABELS and ROUTE_LABELS as "k1=v1,k2=v2".
"""

from typing import Dict, Optional

from .errors import UnsupportedSelector
from .types import LabelSelector


def match_labels(selector: Optional[LabelSelector]) -> Dict[str, str]:
    """
    Return a sorted copy of a selector's matchLabels.

    Args:
        selector: Label selector, or None

    Returns:
        Dict of labels ordered by key (empty for None)

    Raises:
        UnsupportedSelector: If the selector has matchExpressions
    """
    if selector is None:
        return {}

    if selector.match_expressions:
        terms = ", ".join(
            f"{e.key} {e.operator.value}" for e in selector.match_expressions
        )
        raise UnsupportedSelector(
            f"set-based selector expressions are not supported: {terms}"
        )

    return {key: selector.match_labels[key] for key in sorted(selector.match_labels)}


def encode_label_selector(selector: Optional[LabelSelector]) -> str:
    """
    Encode a label selector as a comma-separated "key=value" string.

    None and empty selectors encode to "".
    """
    return ",".join(f"{k}={v}" for k, v in match_labels(selector).items())

"""
Building the server-side action string.

The action sent to the server is a JavaScript function whose parameters
are the bound parameter names in lexicographic order and whose body is
the concatenation of every fragment:

    function(a,b){ <fragment 1><fragment 2> }
"""

import json
from typing import Iterable, List, Mapping


def quote_query(query: str) -> str:
    """Quote ``query`` as a double-quoted JavaScript string literal."""
    return json.dumps(query)


def aql_fragment(query: str) -> str:
    """JavaScript statement running an AQL ``query``."""
    return f"db.query({quote_query(query)});"


def param_names(params: Mapping[str, object]) -> List[str]:
    """Parameter names in signature order (sorted)."""
    return sorted(params)


def build_action(fragments: Iterable[str], params: Mapping[str, object]) -> str:
    """
    Wrap fragments into a single function taking ``params``.
    
    Args:
        fragments: Code fragments in the order they were added
        params: Bound parameters; only the keys are used
    
    Returns:
        The action string
    """
    signature = ",".join(param_names(params))
    body = "".join(fragments)
    return f"function({signature}){{ {body} }}"

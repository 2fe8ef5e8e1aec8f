"""Target-neutral branch tree that the generators lower a trie into.

Expressions are kept as source strings. The subset used here (indexing,
integer arithmetic, comparisons and calls) reads the same in C and
Python, so only statements need per-dialect rendering.
"""

from dataclasses import dataclass, field


@dataclass
class Comment:
    text: str


@dataclass
class Assign:
    ctype: str
    name: str
    expr: str


@dataclass
class Return:
    value: int | float | str  # str: an expression, returned as-is


@dataclass
class If:
    condition: str
    body: list = field(default_factory=list)


@dataclass
class Case:
    value: int
    body: list = field(default_factory=list)


@dataclass
class Switch:
    subject: str
    cases: list[Case] = field(default_factory=list)


@dataclass
class Param:
    ctype: str
    name: str


@dataclass
class Function:
    name: str
    return_type: str
    params: list[Param]
    body: list = field(default_factory=list)


@dataclass
class Prototype:
    """Forward declaration; dialects without them render nothing."""
    function: Function


@dataclass
class Module:
    header: list[str]
    items: list = field(default_factory=list)


def returns(node) -> bool:
    """True if any path through *node* reaches a Return."""
    if isinstance(node, Return):
        return True
    if isinstance(node, (If, Case)):
        return any(returns(child) for child in node.body)
    if isinstance(node, Switch):
        return any(returns(case) for case in node.cases)
    return False


def prune(body: list) -> list:
    """Drop branches that can never return, recursively.

    A branch that cannot return only falls through to whatever follows it,
    so removing it does not change behaviour.
    """
    pruned = []
    for node in body:
        if isinstance(node, Switch):
            cases = [Case(c.value, prune(c.body)) for c in node.cases]
            cases = [c for c in cases if returns(c)]
            if cases:
                pruned.append(Switch(node.subject, cases))
        elif isinstance(node, If):
            inner = prune(node.body)
            if any(returns(child) for child in inner):
                pruned.append(If(node.condition, inner))
        else:
            pruned.append(node)
    return pruned


def ends_in_return(body: list) -> bool:
    return bool(body) and isinstance(body[-1], Return)

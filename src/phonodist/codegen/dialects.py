"""Render a branch tree as C or Python source.

Every render method takes the current indentation level explicitly and
returns a list of lines, so nesting depth never depends on the Python
call stack of the caller.
"""

from phonodist.codegen.branches import (
    Assign,
    Case,
    Comment,
    Function,
    If,
    Module,
    Prototype,
    Return,
    Switch,
    ends_in_return,
)


class Dialect:
    """Shared tree walk; subclasses supply the syntax."""

    name = "base"
    indent_unit = "  "
    item_separator = 1  # blank lines between top-level items

    def render(self, module: Module) -> str:
        lines = [self.comment(text) for text in module.header]
        for item in module.items:
            item_lines = self.render_item(item)
            if not item_lines:
                continue
            lines.extend([""] * self.item_separator)
            lines.extend(item_lines)
        return "\n".join(lines) + "\n"

    def render_item(self, item) -> list[str]:
        if isinstance(item, Function):
            return self.function(item)
        if isinstance(item, Prototype):
            return self.prototype(item.function)
        raise TypeError(f"Unexpected top-level item: {type(item).__name__}")

    def block(self, body: list, level: int, return_type: str) -> list[str]:
        lines: list[str] = []
        for node in body:
            lines.extend(self.statement(node, level, return_type))
        return lines

    def statement(self, node, level: int, return_type: str) -> list[str]:
        pad = self.indent_unit * level
        if isinstance(node, Comment):
            return [pad + self.comment(node.text)]
        if isinstance(node, Assign):
            return [pad + self.assign(node)]
        if isinstance(node, Return):
            return [pad + self.return_(node.value, return_type)]
        if isinstance(node, If):
            return self.if_(node, level, return_type)
        if isinstance(node, Switch):
            return self.switch(node, level, return_type)
        raise TypeError(f"Unexpected statement: {type(node).__name__}")

    def literal(self, value, return_type: str) -> str:
        if isinstance(value, str):
            return value
        if return_type == "float":
            return repr(float(value))
        return str(int(value))

    # Syntax hooks

    def comment(self, text: str) -> str:
        raise NotImplementedError

    def assign(self, node: Assign) -> str:
        raise NotImplementedError

    def return_(self, value, return_type: str) -> str:
        raise NotImplementedError

    def if_(self, node: If, level: int, return_type: str) -> list[str]:
        raise NotImplementedError

    def switch(self, node: Switch, level: int, return_type: str) -> list[str]:
        raise NotImplementedError

    def function(self, fn: Function) -> list[str]:
        raise NotImplementedError

    def prototype(self, fn: Function) -> list[str]:
        raise NotImplementedError


class CDialect(Dialect):
    """C99, for compiling into the consumer's native build."""

    name = "c"

    def comment(self, text: str) -> str:
        return f"// {text}"

    def assign(self, node: Assign) -> str:
        return f"{node.ctype} {node.name} = {node.expr};"

    def literal(self, value, return_type: str) -> str:
        if return_type == "float" and not isinstance(value, str):
            return f"(float) {float(value)!r}"
        return super().literal(value, return_type)

    def return_(self, value, return_type: str) -> str:
        return f"return {self.literal(value, return_type)};"

    def if_(self, node: If, level: int, return_type: str) -> list[str]:
        pad = self.indent_unit * level
        return (
            [f"{pad}if ({node.condition}) {{"]
            + self.block(node.body, level + 1, return_type)
            + [f"{pad}}}"]
        )

    def switch(self, node: Switch, level: int, return_type: str) -> list[str]:
        pad = self.indent_unit * level
        inner = self.indent_unit * (level + 1)
        lines = [f"{pad}switch ({node.subject}) {{"]
        for case in node.cases:
            lines.append(f"{inner}case {case.value}:")
            lines.extend(self.block(case.body, level + 2, return_type))
            if not ends_in_return(case.body):
                lines.append(f"{inner}{self.indent_unit}break;")
        lines.append(f"{pad}}}")
        return lines

    def signature(self, fn: Function) -> str:
        params = ", ".join(
            f"{p.ctype}{p.name}" if p.ctype.endswith("*") else f"{p.ctype} {p.name}"
            for p in fn.params
        )
        return f"{fn.return_type} {fn.name}({params})"

    def function(self, fn: Function) -> list[str]:
        return (
            [f"{self.signature(fn)} {{"]
            + self.block(fn.body, 1, fn.return_type)
            + ["}"]
        )

    def prototype(self, fn: Function) -> list[str]:
        return [f"{self.signature(fn)};"]


class PythonDialect(Dialect):
    """Pure Python using structural pattern matching (3.10+)."""

    name = "python"
    indent_unit = "    "
    item_separator = 2

    def comment(self, text: str) -> str:
        return f"# {text}"

    def assign(self, node: Assign) -> str:
        return f"{node.name} = {node.expr}"

    def return_(self, value, return_type: str) -> str:
        return f"return {self.literal(value, return_type)}"

    def if_(self, node: If, level: int, return_type: str) -> list[str]:
        pad = self.indent_unit * level
        return [f"{pad}if {node.condition}:"] + self.block(node.body, level + 1, return_type)

    def switch(self, node: Switch, level: int, return_type: str) -> list[str]:
        pad = self.indent_unit * level
        inner = self.indent_unit * (level + 1)
        if not node.cases:
            return []  # match needs at least one case
        lines = [f"{pad}match {node.subject}:"]
        for case in node.cases:
            lines.append(f"{inner}case {case.value}:")
            lines.extend(self.block(case.body, level + 2, return_type))
        return lines

    def function(self, fn: Function) -> list[str]:
        params = ", ".join(p.name for p in fn.params)
        return [f"def {fn.name}({params}):"] + self.block(fn.body, 1, fn.return_type)

    def prototype(self, fn: Function) -> list[str]:
        return []


DIALECTS = {
    "c": CDialect,
    "python": PythonDialect,
}


def get_dialect(name: str) -> Dialect:
    """Get a dialect by name ("c" or "python")."""
    if name not in DIALECTS:
        raise ValueError(f"Unknown dialect: {name!r}. Available: {list(DIALECTS.keys())}")
    return DIALECTS[name]()

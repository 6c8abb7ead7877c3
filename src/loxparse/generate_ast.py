import os
import sys
from typing import TextIO


EXPR_TYPES = [
    "Binary   : Expr left, scanner.Token operator, Expr right",
    "Grouping : Expr expression",
    "Literal  : value.LoxValue value",
    "Unary    : scanner.Token operator, Expr right",
]

HEADER = """\
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Protocol, TypeVar

from loxparse import scanner
from loxparse import value


T_co = TypeVar("T_co", covariant=True)
"""


def parse_type(type_spec: str) -> tuple[str, list[tuple[str, str]]]:
    """
    Splits "Name : Type field, Type field" into the class name and a list of
    (field, type) pairs.
    """
    class_name, field_list = (part.strip() for part in type_spec.split(":", 1))
    fields = []
    for field in field_list.split(", "):
        typ, name = field.split()
        fields.append((name, typ))
    return class_name, fields


def define_ast(output_dir: str, base_name: str, types: list[str]) -> str:
    path = os.path.join(output_dir, f"{base_name.lower()}.py")
    parsed = [parse_type(t) for t in types]
    with open(path, "w", encoding="utf-8") as writer:
        writer.write(HEADER)
        define_visitor(writer, base_name, [name for name, _ in parsed])
        writer.write(
            f"\n\nclass {base_name}(ABC):\n"
            "    @abstractmethod\n"
            f"    def accept(self, visitor: {base_name}Visitor[T_co]) -> T_co:\n"
            "        raise NotImplementedError\n"
        )
        for class_name, fields in parsed:
            define_type(writer, base_name, class_name, fields)
    return path


def define_visitor(writer: TextIO, base_name: str, class_names: list[str]):
    writer.write(f"\n\nclass {base_name}Visitor(Protocol[T_co]):\n")
    methods = [
        f"    def visit_{name.lower()}(self, {base_name.lower()}: \"{name}\") -> T_co:\n"
        "        ...\n"
        for name in class_names
    ]
    writer.write("\n".join(methods))


def define_type(
    writer: TextIO, base_name: str, class_name: str, fields: list[tuple[str, str]]
):
    writer.write(f"\n\n@dataclass(frozen=True)\nclass {class_name}({base_name}):\n")
    for name, typ in fields:
        writer.write(f"    {name}: {typ}\n")
    writer.write(
        f"\n    def accept(self, visitor: {base_name}Visitor[T_co]) -> T_co:\n"
        f"        return visitor.visit_{class_name.lower()}(self)\n"
    )


def main():
    if len(sys.argv) != 2:
        print("Usage: generate_ast <output directory>", file=sys.stderr)
        sys.exit(64)
    define_ast(sys.argv[1], "Expr", EXPR_TYPES)


if __name__ == "__main__":
    main()

"""Dispatch compiler: lower the phoneme inventory into byte-dispatch code."""

import logging
import sys
from typing import TextIO

from phonodist.codegen.boundary import next_phoneme_length_module
from phonodist.codegen.branches import Module
from phonodist.codegen.cost import phonetic_cost_module
from phonodist.codegen.dialects import Dialect, get_dialect
from phonodist.inventory import PhoneticConfig

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Writes generated dispatch code for *config* to *writer*.

    The trie is rebuilt per call from the immutable config, so one
    generator can emit both units in any order.
    """

    def __init__(
        self,
        config: PhoneticConfig,
        writer: TextIO | None = None,
        dialect: str | Dialect = "c",
    ):
        self.config = config
        self.writer = writer if writer is not None else sys.stdout
        self.dialect = get_dialect(dialect) if isinstance(dialect, str) else dialect

    def generate_next_phoneme_length_code(self) -> None:
        self._write("next_phoneme_length", next_phoneme_length_module(self.config))

    def generate_phonetic_cost_code(self) -> None:
        self._write("phonetic_cost", phonetic_cost_module(self.config))

    def generate_all(self) -> None:
        """Both units, segmentation first so the cost code can call it."""
        self.generate_next_phoneme_length_code()
        self.write("")
        self.generate_phonetic_cost_code()

    def write(self, text: str) -> None:
        self.writer.write(text + "\n")

    def _write(self, name: str, module: Module) -> None:
        source = self.dialect.render(module)
        self.writer.write(source)
        self.writer.flush()
        logger.info(f"Generated {name} ({self.dialect.name}, {source.count(chr(10))} lines)")


def generate_next_phoneme_length(config: PhoneticConfig, dialect: str = "c") -> str:
    """Source text of the segmentation function."""
    return get_dialect(dialect).render(next_phoneme_length_module(config))


def generate_phonetic_cost(config: PhoneticConfig, dialect: str = "c") -> str:
    """Source text of the cost lookup functions."""
    return get_dialect(dialect).render(phonetic_cost_module(config))


def generate_all(config: PhoneticConfig, dialect: str = "c") -> str:
    """Both units as a single source file."""
    return (
        generate_next_phoneme_length(config, dialect)
        + "\n"
        + generate_phonetic_cost(config, dialect)
    )

"""
craft DSL Parser Package.

The parser is built from mixins, one per construct type, combined into a
single Parser class.

The main exports are:
- Parser: The complete parser class
- parse_dsl: Convenience function to parse a DSL file

Usage:
    from craft.core.dsl_parser_impl import parse_dsl

    module = parse_dsl(text, file)
"""

from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .actors import ActorParserMixin
from .architecture import ArchitectureParserMixin
from .base import CONNECTOR_WORDS, BaseParser
from .domains import DomainParserMixin
from .exposure import ExposureParserMixin
from .services import ServiceParserMixin
from .usecase import UseCaseParserMixin


class Parser(
    BaseParser,
    ActorParserMixin,
    DomainParserMixin,
    ServiceParserMixin,
    ExposureParserMixin,
    ArchitectureParserMixin,
    UseCaseParserMixin,
):
    """
    Complete craft DSL Parser.

    - ActorParserMixin: ``actor`` / ``actors``
    - DomainParserMixin: ``domain`` / ``domains``
    - ServiceParserMixin: ``service`` / ``services``
    - ExposureParserMixin: ``exposure``
    - ArchitectureParserMixin: ``arch``
    - UseCaseParserMixin: ``use_case`` scenarios and actions
    """

    def parse(self) -> list[ir.Declaration]:
        """
        Parse the whole file.

        Returns:
            Declarations in source order
        """
        dispatch = {
            TokenType.ACTOR: self.parse_actor,
            TokenType.ACTORS: self.parse_actors_block,
            TokenType.DOMAIN: self.parse_domain,
            TokenType.DOMAINS: self.parse_domains_block,
            TokenType.SERVICE: self.parse_service,
            TokenType.SERVICES: self.parse_services_block,
            TokenType.EXPOSURE: self.parse_exposure,
            TokenType.ARCH: self.parse_architecture,
            TokenType.USE_CASE: self.parse_use_case,
        }

        declarations: list[ir.Declaration] = []

        self.skip_newlines()
        while not self.match(TokenType.EOF):
            token = self.current_token()
            handler = dispatch.get(token.type)
            if handler is None:
                raise self.error(
                    f"Unexpected '{token.value}' at top level "
                    "(expected actor, domain, service, exposure, arch or use_case)"
                )
            declarations.append(handler())
            self.skip_newlines()

        return declarations


def parse_dsl(text: str, file: Path) -> ir.ModuleIR:
    """
    Parse DSL text into a module.

    Args:
        text: DSL source text
        file: Source file path

    Returns:
        ModuleIR holding the file's declarations

    Raises:
        ParseError: If the text is not valid craft DSL
    """
    tokens = tokenize(text, file)
    parser = Parser(tokens, file, text)
    return ir.ModuleIR(name=file.stem, file=file, declarations=parser.parse())


__all__ = ["CONNECTOR_WORDS", "Parser", "parse_dsl"]

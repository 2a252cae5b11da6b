"""
Actor parsing for the craft DSL.

Handles ``actor user Customer`` and ``actors { user Admin  system Billing }``.
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class ActorParserMixin:
    """
    Mixin providing actor parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_word: Any
        expect_name: Any
        advance: Any
        match: Any
        skip_newlines: Any

    def parse_actor(self) -> ir.ActorDecl:
        """Parse ``actor <kind> <name>``."""
        self.expect(TokenType.ACTOR)
        return self._parse_actor_entry()

    def parse_actors_block(self) -> ir.ActorsBlock:
        """Parse ``actors { <kind> <name> ... }``."""
        self.expect(TokenType.ACTORS)
        self.skip_newlines()
        self.expect(TokenType.LBRACE)

        actors = []
        self.skip_newlines()
        while not self.match(TokenType.RBRACE):
            actors.append(self._parse_actor_entry())
            if self.match(TokenType.COMMA):
                self.advance()
            self.skip_newlines()
        self.expect(TokenType.RBRACE)

        return ir.ActorsBlock(actors=actors)

    def _parse_actor_entry(self) -> ir.ActorDecl:
        # Kind stays a raw token; the normalizer decides what it means
        kind = self.expect_word().value
        name = self.expect_name()
        return ir.ActorDecl(kind=kind, name=name)

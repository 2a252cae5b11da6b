"""
Use case parsing for the craft DSL.

A use case is a list of scenarios. Each scenario opens with a ``when``
line and continues with one action per line until the next ``when``::

    use_case "Place Order" {
        when Customer places an order
            Order asks Payment to charge card
            Payment returns confirmation
            Order notifies "Order Placed"
        when Inventory listens "Order Placed"
            Inventory reserves stock
        when "Nightly Tick"
            Inventory recounts stock
    }

Action forms:

- ``D asks T [connector] phrase``    synchronous call
- ``D notifies "event"``             asynchronous publish
- ``D returns [to T] phrase``        return to the caller or to T
- ``D verb [connector] phrase``      internal work
"""

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType
from .base import CONNECTOR_WORDS


class UseCaseParserMixin:
    """
    Mixin providing use case parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        expect: Any
        expect_word: Any
        expect_name: Any
        advance: Any
        match: Any
        match_word: Any
        current_token: Any
        peek_token: Any
        skip_newlines: Any
        parse_rest_of_line: Any
        end_line: Any
        error: Any

    def parse_use_case(self) -> ir.UseCaseDecl:
        start = self.expect(TokenType.USE_CASE)
        name = self.expect_name()
        self.skip_newlines()
        self.expect(TokenType.LBRACE)
        self.skip_newlines()

        scenarios = []
        while not self.match(TokenType.RBRACE):
            if not self.match(TokenType.WHEN):
                raise self.error(
                    f"Expected 'when' to start a scenario, got '{self.current_token().value}'"
                )
            scenarios.append(self._parse_scenario())

        end = self.expect(TokenType.RBRACE)

        source = ir.SourceRange(file=str(self.file), start_line=start.line, end_line=end.line)
        return ir.UseCaseDecl(name=name, scenarios=scenarios, source=source)

    def _parse_scenario(self) -> ir.ScenarioDecl:
        trigger = self._parse_trigger()

        actions = []
        while not self.match(TokenType.WHEN, TokenType.RBRACE, TokenType.EOF):
            actions.append(self._parse_action())

        return ir.ScenarioDecl(trigger=trigger, actions=actions)

    def _parse_trigger(self) -> ir.TriggerDecl:
        """Parse a ``when`` line."""
        self.expect(TokenType.WHEN)

        # when <Domain> listens "<event>"
        if self.peek_token().type == TokenType.LISTENS:
            domain = self.expect_name()
            self.advance()
            if not self.match(TokenType.STRING):
                raise self.error(
                    "Listen triggers need a quoted event name: "
                    f'when {domain} listens "Event Name"'
                )
            event = self.advance().value
            self.end_line()
            return ir.TriggerDecl(kind=ir.TriggerKind.DOMAIN_LISTEN, domain=domain, event=event)

        # when "<event>"
        if self.match(TokenType.STRING):
            event = self.advance().value
            self.end_line()
            return ir.TriggerDecl(kind=ir.TriggerKind.EVENT, event=event)

        # when <actor> <verb> <phrase...>
        actor = self.expect_word().value
        verb = self.expect_word().value
        phrase = " ".join(self.parse_rest_of_line())
        self.end_line()
        return ir.TriggerDecl(kind=ir.TriggerKind.EXTERNAL, actor=actor, verb=verb, phrase=phrase)

    def _parse_action(self) -> ir.ActionDecl:
        domain = self.expect_name()

        if self.match(TokenType.ASKS):
            self.advance()
            target = self.expect_name()
            connector = self._parse_connector()
            phrase = " ".join(self.parse_rest_of_line())
            action = ir.ActionDecl(
                kind=ir.ActionKind.SYNC,
                domain=domain,
                target_domain=target,
                connector=connector,
                phrase=phrase,
            )

        elif self.match(TokenType.NOTIFIES):
            self.advance()
            event = self.expect(TokenType.STRING).value
            action = ir.ActionDecl(kind=ir.ActionKind.ASYNC, domain=domain, event=event)

        elif self.match(TokenType.RETURNS):
            self.advance()
            target = None
            if self.match_word("to"):
                self.advance()
                target = self.expect_name()
            phrase = " ".join(self.parse_rest_of_line())
            action = ir.ActionDecl(
                kind=ir.ActionKind.RETURN,
                domain=domain,
                target_domain=target,
                phrase=phrase,
            )

        else:
            verb = self.expect_word().value
            connector = self._parse_connector()
            phrase = " ".join(self.parse_rest_of_line())
            action = ir.ActionDecl(
                kind=ir.ActionKind.INTERNAL,
                domain=domain,
                verb=verb,
                connector=connector,
                phrase=phrase,
            )

        self.end_line()
        return action

    def _parse_connector(self) -> str:
        token = self.current_token()
        if token.is_word() and token.value in CONNECTOR_WORDS:
            return self.advance().value
        return ""

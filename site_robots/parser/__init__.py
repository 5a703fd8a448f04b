"""site_robots.parser: Лексер директив и сборка групп по user-agent."""

from .groups import ALL_AGENTS, GroupResolver, resolve
from .lexer import Directive, DirectiveKind, tokenize

__all__ = ["ALL_AGENTS", "Directive", "DirectiveKind", "GroupResolver", "resolve", "tokenize"]

"""Minimal LSP server for lexicomp — completion and semantic tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    SemanticTokens,
    SemanticTokensLegend,
    SemanticTokensParams,
    SemanticTokenTypes,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from lexicomp import __version__
from lexicomp.completer import Completer
from lexicomp.languages import DEFAULT_SYNTAX, get_syntax, guess_syntax, syntax_for_language_id
from lexicomp.lexer import tokenize
from lexicomp.syntax import Syntax
from lexicomp.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Token classes reported as semantic tokens; whitespace and punctuation are left out
_SEMANTIC_TYPES: dict[TokenType, SemanticTokenTypes] = {
    TokenType.COMMENT: SemanticTokenTypes.Comment,
    TokenType.KEYWORD: SemanticTokenTypes.Keyword,
    TokenType.TYPE: SemanticTokenTypes.Type,
    TokenType.SPECIAL: SemanticTokenTypes.Macro,
    TokenType.LITERAL: SemanticTokenTypes.Variable,
    TokenType.FUNCTION: SemanticTokenTypes.Function,
    TokenType.STRING: SemanticTokenTypes.String,
    TokenType.HYPERLINK: SemanticTokenTypes.String,
    TokenType.NUMERIC: SemanticTokenTypes.Number,
}

TOKEN_TYPES: list[str] = list(dict.fromkeys(t.value for t in _SEMANTIC_TYPES.values()))
_TYPE_INDEX: dict[TokenType, int] = {
    tt: TOKEN_TYPES.index(st.value) for tt, st in _SEMANTIC_TYPES.items()
}
LEGEND = SemanticTokensLegend(token_types=TOKEN_TYPES, token_modifiers=[])

_ITEM_KINDS: dict[TokenType, CompletionItemKind] = {
    TokenType.KEYWORD: CompletionItemKind.Keyword,
    TokenType.SPECIAL: CompletionItemKind.Constant,
    TokenType.TYPE: CompletionItemKind.Class,
    TokenType.LITERAL: CompletionItemKind.Text,
}


def _utf16_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


def syntax_for_document(uri: str, language_id: str | None) -> Syntax:
    """Pick a descriptor from the language id, then the file extension, then the default."""
    filename = uri.rsplit("/", 1)[-1] if "/" in uri else uri
    return (
        syntax_for_language_id(language_id)
        or guess_syntax(filename)
        or get_syntax(DEFAULT_SYNTAX)
    )


def encode_semantic_tokens(tokens: Iterable[Token]) -> list[int]:
    """Encode tokens as LSP relative semantic-token data (UTF-16 columns).

    Multi-line tokens are split into one entry per line.
    """
    data: list[int] = []
    line = col = 0
    prev_line = prev_col = 0
    for token in tokens:
        kind = _TYPE_INDEX.get(token.type)
        for i, segment in enumerate(token.text.split("\n")):
            if i:
                line += 1
                col = 0
            width = _utf16_len(segment)
            if kind is not None and width:
                delta_col = col - prev_col if line == prev_line else col
                data.extend((line - prev_line, delta_col, width, kind, 0))
                prev_line, prev_col = line, col
            col += width
    return data


class DocumentSessions:
    """One completion session per open document."""

    def __init__(self) -> None:
        self._sessions: dict[str, Completer] = {}

    def __contains__(self, uri: str) -> bool:
        return uri in self._sessions

    def sync(self, doc: TextDocument) -> Completer:
        """Create or refresh the session for doc from its current source."""
        session = self._sessions.get(doc.uri)
        if session is None:
            syntax = syntax_for_document(doc.uri, doc.language_id)
            logger.debug("open %s as %s", doc.uri, syntax.language)
            session = self._sessions[doc.uri] = Completer(syntax)
        session.update(doc.source, session.cursor)
        return session

    def close(self, uri: str) -> None:
        self._sessions.pop(uri, None)

    def complete(self, doc: TextDocument, position: Position) -> CompletionList:
        """Completion candidates at position, static words ranked first."""
        session = self.sync(doc)
        offset = doc.offset_at_position(position)
        session.update(doc.source, offset)
        logger.debug("complete %s at %d: prefix %r", doc.uri, offset, session.prefix)

        items = [
            CompletionItem(
                label=word,
                kind=_ITEM_KINDS.get(tt, CompletionItemKind.Text),
                sort_text=f"{i:05d}",
            )
            for i, (word, tt) in enumerate(session.items())
        ]
        return CompletionList(is_incomplete=False, items=items)

    def semantic_tokens(self, doc: TextDocument) -> SemanticTokens:
        session = self.sync(doc)
        return SemanticTokens(data=encode_semantic_tokens(tokenize(session.syntax, doc.source)))


server = LanguageServer(
    "lexicomp-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Full
)
sessions = DocumentSessions()


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    sessions.sync(ls.workspace.get_text_document(params.text_document.uri))


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    sessions.sync(ls.workspace.get_text_document(params.text_document.uri))


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams) -> None:
    sessions.close(params.text_document.uri)


@server.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=False))
def completion(ls: LanguageServer, params: CompletionParams) -> CompletionList:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return sessions.complete(doc, params.position)


@server.feature(TEXT_DOCUMENT_SEMANTIC_TOKENS_FULL, LEGEND)
def semantic_tokens_full(ls: LanguageServer, params: SemanticTokensParams) -> SemanticTokens:
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return sessions.semantic_tokens(doc)


def main() -> None:
    server.start_io()

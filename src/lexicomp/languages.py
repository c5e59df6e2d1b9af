"""Builtin syntax descriptors — name lookup and file-type guessing."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import PurePath

from lexicomp.errors import UnknownSyntaxError
from lexicomp.syntax import Syntax

_URL_SCHEMES = frozenset({"http", "https", "ftp", "file"})


def _words(text: str) -> frozenset[str]:
    return frozenset(text.split())


def rust() -> Syntax:
    return Syntax(
        language="Rust",
        case_sensitive=True,
        comment="//",
        comment_multiline=("/*", "*/"),
        hyperlinks=_URL_SCHEMES,
        keywords=_words(
            """
            as async await break const continue crate dyn else enum extern fn for
            if impl in let loop match mod move mut pub ref return static struct
            super trait type unsafe use where while yield
            """
        ),
        types=_words(
            """
            bool char str i8 i16 i32 i64 i128 isize u8 u16 u32 u64 u128 usize
            f32 f64 String Vec Option Result Box Rc Arc Cell RefCell HashMap
            HashSet BTreeMap BTreeSet VecDeque
            """
        ),
        special=_words("Self self true false None Some Ok Err"),
        quotes=frozenset('"'),
    )


def python() -> Syntax:
    return Syntax(
        language="Python",
        case_sensitive=True,
        comment="#",
        hyperlinks=_URL_SCHEMES,
        keywords=_words(
            """
            and as assert async await break class continue def del elif else
            except finally for from global if import in is lambda nonlocal not
            or pass raise return try while with yield match case
            """
        ),
        types=_words(
            """
            bool bytes bytearray complex dict float frozenset int list object
            set str tuple type Any Callable Iterable Iterator Protocol
            """
        ),
        special=_words("False None True self cls __init__ __name__ __main__"),
        quotes=frozenset("\"'"),
    )


def lua() -> Syntax:
    return Syntax(
        language="Lua",
        case_sensitive=True,
        comment="--",
        comment_multiline=("--[[", "]]"),
        hyperlinks=_URL_SCHEMES,
        keywords=_words(
            """
            and break do else elseif end for function goto if in local not or
            repeat return then until while
            """
        ),
        types=_words("boolean number string table userdata thread"),
        special=_words("false nil true self _G _ENV"),
        quotes=frozenset("\"'"),
    )


def shell() -> Syntax:
    return Syntax(
        language="Shell",
        case_sensitive=True,
        comment="#",
        hyperlinks=_URL_SCHEMES,
        keywords=_words(
            """
            case do done elif else esac fi for function if in select then time
            until while
            """
        ),
        types=_words("local export declare readonly"),
        special=_words(
            """
            echo cd pwd exit return source alias unset shift test read printf
            eval exec trap grep sed awk
            """
        ),
        quotes=frozenset("\"'`"),
    )


def sql() -> Syntax:
    return Syntax(
        language="SQL",
        case_sensitive=False,
        comment="--",
        comment_multiline=("/*", "*/"),
        keywords=_words(
            """
            ADD ALL ALTER AND AS ASC BETWEEN BY CASE CHECK COLUMN CONSTRAINT
            CREATE CROSS DATABASE DEFAULT DELETE DESC DISTINCT DROP ELSE END
            EXISTS FOREIGN FROM FULL GROUP HAVING IN INDEX INNER INSERT INTO IS
            JOIN KEY LEFT LIKE LIMIT NOT NULL ON OR ORDER OUTER OVER PARTITION
            PRIMARY REFERENCES RIGHT SELECT SET TABLE THEN TOP UNION UNIQUE
            UPDATE VALUES VIEW WHEN WHERE WITH
            """
        ),
        types=_words(
            """
            BIGINT BINARY BIT BLOB BOOLEAN CHAR DATE DATETIME DECIMAL DOUBLE
            FLOAT INT INTEGER NUMERIC REAL SMALLINT TEXT TIME TIMESTAMP VARCHAR
            """
        ),
        special=_words(
            """
            AVG COUNT MAX MIN SUM NOW COALESCE CAST RANK ROW_NUMBER DENSE_RANK
            TRUE FALSE
            """
        ),
        quotes=frozenset("'\""),
    )


def asm() -> Syntax:
    return Syntax(
        language="Assembly",
        case_sensitive=False,
        comment=";",
        keywords=_words(
            """
            mov push pop call ret jmp je jne jz jnz jg jge jl jle cmp test add
            sub mul imul div idiv inc dec and or xor not shl shr lea nop int
            syscall
            """
        ),
        types=_words("byte word dword qword db dw dd dq resb resw resd resq"),
        special=_words(
            """
            rax rbx rcx rdx rsi rdi rbp rsp eax ebx ecx edx esi edi ebp esp
            section global extern
            """
        ),
        quotes=frozenset("\"'"),
    )


BUILTIN_SYNTAXES: dict[str, Callable[[], Syntax]] = {
    "rust": rust,
    "python": python,
    "lua": lua,
    "shell": shell,
    "sql": sql,
    "asm": asm,
}

# File extension -> builtin name
EXTENSIONS: dict[str, str] = {
    ".rs": "rust",
    ".py": "python",
    ".pyi": "python",
    ".lua": "lua",
    ".sh": "shell",
    ".bash": "shell",
    ".zsh": "shell",
    ".sql": "sql",
    ".asm": "asm",
    ".s": "asm",
    ".nasm": "asm",
}

# LSP language identifier -> builtin name
LANGUAGE_IDS: dict[str, str] = {
    "rust": "rust",
    "python": "python",
    "lua": "lua",
    "shellscript": "shell",
    "sh": "shell",
    "bash": "shell",
    "sql": "sql",
    "asm": "asm",
    "nasm": "asm",
}

DEFAULT_SYNTAX = "rust"


def get_syntax(name: str, extra: Mapping[str, Syntax] | None = None) -> Syntax:
    """Look up a descriptor by name, user-defined ones first. Case-insensitive."""
    key = name.lower()
    if extra:
        for extra_name, syntax in extra.items():
            if extra_name.lower() == key:
                return syntax
    factory = BUILTIN_SYNTAXES.get(key)
    if factory is None:
        known = list(BUILTIN_SYNTAXES) + list(extra or {})
        raise UnknownSyntaxError(name, known)
    return factory()


def guess_syntax(filename: str) -> Syntax | None:
    """Pick a builtin descriptor from the file extension, or None."""
    name = EXTENSIONS.get(PurePath(filename).suffix.lower())
    return BUILTIN_SYNTAXES[name]() if name else None


def syntax_for_language_id(language_id: str | None) -> Syntax | None:
    """Pick a builtin descriptor from an editor language identifier, or None."""
    if not language_id:
        return None
    name = LANGUAGE_IDS.get(language_id.lower())
    return BUILTIN_SYNTAXES[name]() if name else None

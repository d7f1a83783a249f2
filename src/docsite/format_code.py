"""
Code block formatter for snippets embedded in docs pages.

Two entry points:
- format_code_block(): async, pretty-prints JS/TS/JSON through a formatting
  engine and cleans up whitespace for everything else
- format_code_block_sync(): whitespace cleanup only, never suspends

The async version never raises. If the engine fails, the snippet is shown
exactly as the author wrote it.

format_markdown_code_blocks() applies the sync formatter to every fenced
block of a markdown document, for the page pipeline.
"""
import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Optional

from src.docsite import config

logger = logging.getLogger(__name__)


class FormatterError(Exception):
    """The structured formatting engine couldn't format a snippet."""


# ---------------------------------------------------------------------------
# Profiles — one per parser, same options as the site's prettier config
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FormattingProfile:
    parser: str
    tab_width: int = 2
    print_width: int = 80
    single_quote: bool = False
    trailing_comma: Optional[str] = None
    bracket_spacing: bool = True
    arrow_parens: Optional[str] = None
    semi: bool = True

    def prettier_args(self):
        """Translate the profile into prettier CLI flags."""
        args = [
            "--parser", self.parser,
            "--tab-width", str(self.tab_width),
            "--print-width", str(self.print_width),
        ]
        if self.single_quote:
            args.append("--single-quote")
        if self.trailing_comma:
            args += ["--trailing-comma", self.trailing_comma]
        if not self.bracket_spacing:
            args.append("--no-bracket-spacing")
        if self.arrow_parens:
            args += ["--arrow-parens", self.arrow_parens]
        if not self.semi:
            args.append("--no-semi")
        return args


JAVASCRIPT_PROFILE = FormattingProfile(
    parser="babel",
    single_quote=True,
    trailing_comma="es5",
    arrow_parens="avoid",
)
TYPESCRIPT_PROFILE = FormattingProfile(
    parser="typescript",
    single_quote=True,
    trailing_comma="es5",
    arrow_parens="avoid",
)
JSON_PROFILE = FormattingProfile(parser="json")

# Tags that get full pretty-printing. Everything else (python included)
# only gets whitespace cleanup.
STRUCTURED_PROFILES = {
    "javascript": JAVASCRIPT_PROFILE,
    "js": JAVASCRIPT_PROFILE,
    "typescript": TYPESCRIPT_PROFILE,
    "ts": TYPESCRIPT_PROFILE,
    "json": JSON_PROFILE,
}

# Tags the markdown pipeline touches at all
SUPPORTED_LANGUAGES = ["javascript", "js", "typescript", "ts", "python", "py", "json"]


def get_profile(language):
    """Structured profile for a language tag, or None if it only gets cleanup."""
    if not language:
        return None
    return STRUCTURED_PROFILES.get(language.lower())


def should_format_language(language) -> bool:
    return bool(language) and language.lower() in SUPPORTED_LANGUAGES


# ---------------------------------------------------------------------------
# Engines
# ---------------------------------------------------------------------------

class _Number:
    """A JSON number kept as written, so no precision is lost."""

    __slots__ = ("text",)

    def __init__(self, text):
        self.text = text

    def __eq__(self, other):
        return isinstance(other, _Number) and other.text == self.text

    def __repr__(self):
        return f"_Number({self.text!r})"


def _unique_keys(pairs):
    seen = set()
    for key, _ in pairs:
        if key in seen:
            raise FormatterError(f"duplicate key {key!r}")
        seen.add(key)
    return dict(pairs)


def _reject_constant(name):
    raise FormatterError(f"{name} is not valid JSON")


def _parse_json(code):
    try:
        return json.loads(
            code,
            object_pairs_hook=_unique_keys,
            parse_int=_Number,
            parse_float=_Number,
            parse_constant=_reject_constant,
        )
    except ValueError as e:
        raise FormatterError(f"invalid JSON: {e}") from e


class JsonEngine:
    """
    In-process JSON pretty-printer.

    Keeps key order and numbers exactly as written. Objects always break
    onto one line per key; arrays of scalars stay on one line while they
    fit in print_width.

    Raises FormatterError for anything the output can't represent
    faithfully: invalid JSON, duplicate keys, NaN/Infinity.
    """

    async def format(self, code: str, profile: FormattingProfile) -> str:
        data = _parse_json(code)
        result = self._emit(data, profile, 0)
        if _parse_json(result) != data:
            raise FormatterError("formatted JSON does not match the input")
        # prettier ends its output with a newline; match it
        return result + "\n"

    def _emit(self, value, profile, level):
        if isinstance(value, dict):
            if not value:
                return "{}"
            pad = " " * (profile.tab_width * (level + 1))
            items = [
                f"{pad}{json.dumps(key, ensure_ascii=False)}: {self._emit(item, profile, level + 1)}"
                for key, item in value.items()
            ]
            return "{\n" + ",\n".join(items) + "\n" + " " * (profile.tab_width * level) + "}"

        if isinstance(value, list):
            if not value:
                return "[]"
            items = [self._emit(item, profile, level + 1) for item in value]
            flat = "[" + ", ".join(items) + "]"
            scalars = not any(isinstance(item, (dict, list)) for item in value)
            if scalars and profile.tab_width * level + len(flat) <= profile.print_width:
                return flat
            pad = " " * (profile.tab_width * (level + 1))
            return "[\n" + ",\n".join(pad + item for item in items) + "\n" + " " * (profile.tab_width * level) + "]"

        if isinstance(value, _Number):
            return value.text
        return json.dumps(value, ensure_ascii=False)


class PrettierEngine:
    """
    Runs the prettier CLI as a subprocess.

    Input: code on stdin, the profile as CLI flags
    Output: the formatted code from stdout

    Raises FormatterError if the binary is missing, exits non-zero,
    or takes longer than the timeout.
    """

    def __init__(self, binary: Optional[str] = None, timeout: Optional[float] = None):
        self.binary = binary or config.PRETTIER_BIN
        self.timeout = timeout if timeout is not None else config.PRETTIER_TIMEOUT_SECONDS

    async def format(self, code: str, profile: FormattingProfile) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                self.binary,
                *profile.prettier_args(),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise FormatterError(f"could not run {self.binary}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(code.encode("utf-8")),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            raise FormatterError(f"{self.binary} timed out after {self.timeout}s") from e
        except BaseException:
            # Cancelled mid-run: don't leave prettier behind
            await self._kill(proc)
            raise

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise FormatterError(f"{self.binary} exited {proc.returncode}: {detail[:500]}")

        return stdout.decode("utf-8")

    async def _kill(self, proc):
        if proc.returncode is None:
            proc.kill()
        await proc.wait()


# Parser name -> engine. Tests swap entries out to simulate failures.
_prettier = PrettierEngine()
ENGINES = {
    "babel": _prettier,
    "typescript": _prettier,
    "json": JsonEngine(),
}


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

_BLANK_RUN = re.compile(r"\n{3,}")


def cleanup_code(code: str) -> str:
    """
    Generic whitespace cleanup.

    - trailing whitespace removed from every line
    - runs of 3+ newlines collapsed to 2 (at most one empty line in a row)
    - leading/trailing whitespace of the whole block removed. This includes
      the first line's indentation: "    x = 1" becomes "x = 1"

    Idempotent: cleanup_code(cleanup_code(x)) == cleanup_code(x)
    """
    lines = [line.rstrip() for line in code.split("\n")]
    return _BLANK_RUN.sub("\n\n", "\n".join(lines)).strip()


async def format_code_block(code: str, language: Optional[str]) -> str:
    """
    Format a snippet for display.

    Input: the snippet, its language tag (case-insensitive, may be None)
    Output: the formatted snippet

    JS/TS/JSON are pretty-printed. Anything else gets cleanup_code().
    If pretty-printing fails, the original snippet is returned untouched.
    """
    profile = get_profile(language)
    if profile is None:
        return cleanup_code(code)

    try:
        return await ENGINES[profile.parser].format(code, profile)
    except Exception as e:
        logger.warning(f"Failed to format {language} code block: {e}")
        return code


def format_code_block_sync(code: str, language: Optional[str] = None) -> str:
    """
    Whitespace-only version of format_code_block() for code that can't await.
    The language tag is accepted but ignored.
    """
    return cleanup_code(code)


# ---------------------------------------------------------------------------
# Markdown pipeline
# ---------------------------------------------------------------------------

_FENCE_OPEN = re.compile(r"^\s*(`{3,})\s*([^\s`]*)")


def format_markdown_code_blocks(markdown: str) -> str:
    """
    Clean up every fenced code block in a markdown document.

    Input: markdown text
    Output: the same text with supported-language blocks passed through
            format_code_block_sync()

    Blocks without a tag, blocks in other languages, and unterminated
    fences are left exactly as they were.
    """
    lines = markdown.split("\n")
    out = []
    i = 0

    while i < len(lines):
        line = lines[i]
        match = _FENCE_OPEN.match(line)
        if not match:
            out.append(line)
            i += 1
            continue

        fence, language = match.group(1), match.group(2)

        # Find the closing fence (same char, at least as long)
        end = i + 1
        while end < len(lines) and not _is_closing_fence(lines[end], fence):
            end += 1

        if end == len(lines):
            out.extend(lines[i:])
            break

        body = "\n".join(lines[i + 1:end])
        out.append(line)
        if should_format_language(language):
            body = format_code_block_sync(body, language)
        if i + 1 < end:
            out.append(body)
        out.append(lines[end])
        i = end + 1

    return "\n".join(out)


def _is_closing_fence(line, fence):
    stripped = line.strip()
    return stripped.startswith(fence) and not stripped.strip("`")

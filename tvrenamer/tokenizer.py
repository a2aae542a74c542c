"""Template tokenizer and renderer for episode file names.

A template is plain text with placeholders in braces::

    {series} - S{season}E{episode} - {title}

Recognised placeholders are ``{series}``, ``{season}``, ``{episode}`` and
``{title}``. The numeric ones accept a pad width, ``{episode:3}`` or the
format-spec spelling ``{episode:03d}``. Anything else in braces is kept as
literal text, so tokenizing and rendering never fail.

The file extension is not part of the template; the resolver appends the
source's extension after rendering.
"""
import re

from .models import RenderContext, Template, Token, TokenKind


DEFAULT_TEMPLATE = "{series} - S{season}E{episode} - {title}"

PLACEHOLDER_NAMES = {
    "series": TokenKind.SERIES,
    "series_name": TokenKind.SERIES,
    "show": TokenKind.SERIES,
    "season": TokenKind.SEASON,
    "episode": TokenKind.EPISODE,
    "title": TokenKind.TITLE,
    "episode_title": TokenKind.TITLE,
}

NUMERIC_KINDS = {TokenKind.SEASON, TokenKind.EPISODE}
OPTIONAL_KINDS = {TokenKind.SERIES, TokenKind.TITLE}

# {episode:3}, {episode:03}, {episode:03d}
PAD_SPEC = re.compile(r'^0?(\d{1,2})d?$')
SEPARATORS = " \t-_."


def sanitize_filename(name: str) -> str:
    """
    Remove or replace characters that are invalid in file names.

    Args:
        name: The name to sanitize

    Returns:
        Sanitized name safe for use inside a filename
    """
    # Characters not allowed in Windows filenames: / \ : * ? " < > |
    sanitized = re.sub(r'[<>:"/\\|?*]', '', name)
    sanitized = re.sub(r'\s+', ' ', sanitized)
    return sanitized.strip('. ')


def _parse_placeholder(body: str) -> Token | None:
    """Turn the text between braces into a token, or None if unrecognised."""
    name, _, spec = body.partition(":")
    kind = PLACEHOLDER_NAMES.get(name.strip().lower())
    if kind is None:
        return None

    if not spec:
        return Token(kind)
    if kind not in NUMERIC_KINDS:
        return None

    match = PAD_SPEC.match(spec.strip())
    if not match:
        return None
    return Token(kind, pad=int(match.group(1)))


def _append_text(tokens: list[Token], text: str) -> None:
    if not text:
        return
    if tokens and tokens[-1].kind is TokenKind.TEXT:
        tokens[-1] = Token(TokenKind.TEXT, tokens[-1].text + text)
    else:
        tokens.append(Token(TokenKind.TEXT, text))


def tokenize(template_string: str) -> Template:
    """
    Parse a template string into literal and placeholder tokens.

    Args:
        template_string: Template with {placeholder} markers

    Returns:
        Template holding the ordered tokens
    """
    tokens: list[Token] = []
    position = 0

    while position < len(template_string):
        start = template_string.find("{", position)
        if start == -1:
            _append_text(tokens, template_string[position:])
            break

        _append_text(tokens, template_string[position:start])

        end = template_string.find("}", start + 1)
        if end == -1:
            _append_text(tokens, template_string[start:])
            break

        # A nested '{' means this brace opened plain text, not a placeholder
        nested = template_string.find("{", start + 1, end)
        if nested != -1:
            _append_text(tokens, template_string[start:nested])
            position = nested
            continue

        token = _parse_placeholder(template_string[start + 1:end])
        if token is None:
            _append_text(tokens, template_string[start:end + 1])
        else:
            tokens.append(token)
        position = end + 1

    return Template(tokens=tuple(tokens), source=template_string)


def default_template() -> Template:
    """Return the template used when none is configured."""
    return tokenize(DEFAULT_TEMPLATE)


def format_number(value: int, pad: int) -> str:
    """Zero-pad *value* to at least *pad* digits, never truncating."""
    return str(value).zfill(pad)


def _render_token(token: Token, context: RenderContext) -> str:
    if token.kind is TokenKind.TEXT:
        return token.text
    if token.kind is TokenKind.SERIES:
        return sanitize_filename(context.series)
    if token.kind is TokenKind.TITLE:
        return sanitize_filename(context.title)

    pad = token.pad if token.pad is not None else context.pad_length
    value = context.season if token.kind is TokenKind.SEASON else context.episode
    return format_number(value, pad)


def render(template: Template, context: RenderContext) -> str:
    """
    Render a template for one episode.

    An optional placeholder (series or title) that renders empty takes the
    separator run next to it: the trailing separators of the literal before
    it, or failing that the leading separators of the literal after it.

    Args:
        template: Tokenized template
        context: Values for the placeholders

    Returns:
        The file name without extension
    """
    pieces = [[token, _render_token(token, context)] for token in template.tokens]

    for index, (token, value) in enumerate(pieces):
        if token.kind not in OPTIONAL_KINDS or value:
            continue
        if index > 0 and pieces[index - 1][0].kind is TokenKind.TEXT:
            text = pieces[index - 1][1]
            if text and text[-1] in SEPARATORS:
                pieces[index - 1][1] = text.rstrip(SEPARATORS)
                continue
        if index + 1 < len(pieces) and pieces[index + 1][0].kind is TokenKind.TEXT:
            text = pieces[index + 1][1]
            pieces[index + 1][1] = text.lstrip(SEPARATORS)

    return "".join(value for _, value in pieces).strip()

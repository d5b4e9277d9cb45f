"""
Command string helpers.

tokenize_command turns a configured browser command into an argv list;
strip_inline_comments removes a trailing shell comment from a workspace
command before it is handed to the shell.
"""

from typing import List, Optional


def tokenize_command(command: Optional[str]) -> List[str]:
    """
    Split a command string into argv-style tokens.

    Single and double quotes group words, and a backslash escapes exactly
    the next character. No expansion of globs, variables or subshells is
    performed. An unterminated quote is lenient: the rest of the string
    becomes part of the last token.

    Args:
        command: The command string to split

    Returns:
        List of tokens; empty for an empty command
    """
    if not command:
        return []

    tokens = []
    current = ""
    in_single_quote = False
    in_double_quote = False
    escape_next = False

    for char in command:
        if escape_next:
            current += char
            escape_next = False
            continue

        if char == "\\":
            escape_next = True
            continue

        if char == "'" and not in_double_quote:
            in_single_quote = not in_single_quote
            continue

        if char == '"' and not in_single_quote:
            in_double_quote = not in_double_quote
            continue

        if char == " " and not in_single_quote and not in_double_quote:
            if current:
                tokens.append(current)
                current = ""
        else:
            current += char

    if current:
        tokens.append(current)

    return tokens


def strip_inline_comments(command: Optional[str]) -> str:
    """
    Cut a command at the first `#` outside single or double quotes.

    A quote preceded by a backslash does not change the quoting state.

    Returns:
        The command before the comment, trimmed
    """
    if not command:
        return ""

    in_single_quote = False
    in_double_quote = False
    end = len(command)

    for index, char in enumerate(command):
        escaped = index > 0 and command[index - 1] == "\\"

        if char == '"' and not in_single_quote and not escaped:
            in_double_quote = not in_double_quote
        elif char == "'" and not in_double_quote and not escaped:
            in_single_quote = not in_single_quote
        elif char == "#" and not in_single_quote and not in_double_quote:
            end = index
            break

    return command[:end].strip()

"""
Completion engine: what to suggest while the user is typing.

Overview
- complete(registry, text, word): pure function from the text before the
  cursor (and the word being typed) to a filtered list of Suggestion.
  • No known command yet: suggest command names, in registration order.
  • Known command: ask its completer about the arguments typed so far; a
    command without a completer suggests nothing.
  • Always keep only the suggestions that start with the word being typed.
- CommandCompleter: adapter that plugs the engine into prompt_toolkit.

The engine only reads the registry, so it may run on every keystroke.
"""
from prompt_toolkit.completion import Completer, Completion

from .utils import Suggestion, tokenize


def _promote(suggestion):
    """
    Accept plain strings from completers as description-less suggestions.
    """
    if isinstance(suggestion, Suggestion):
        return suggestion
    if isinstance(suggestion, str):
        return Suggestion(suggestion)
    raise TypeError("completer must return suggestions or strings")


def filter_prefix(suggestions, word, /, *, casesensitive=False):
    """
    Keep the suggestions whose text starts with word.

    An empty word keeps everything. Matching ignores case unless casesensitive.
    """
    if not word:
        return list(suggestions)
    if casesensitive:
        return [suggestion for suggestion in suggestions if suggestion.text.startswith(word)]
    word = word.casefold()
    return [suggestion for suggestion in suggestions if suggestion.text.casefold().startswith(word)]


def complete(registry, text, word, /, *, casesensitive=False):
    """
    Suggest completions for the text before the cursor.

    Parameters
    - registry: Registry to read commands and name suggestions from.
    - text: str, everything typed before the cursor.
    - word: str, the word being typed (empty right after a space).
    - casesensitive: bool (keyword-only), prefix matching mode.

    Returns
    - list[Suggestion]
    """
    name, space, rest = text.partition(" ")
    suggestions = registry.suggestions
    if (entry := registry.get(name)) is not None:
        if entry.command.completer is not None:
            args = tokenize(rest) if space else []
            suggestions = map(_promote, entry.command.completer(args) or ())
        else:
            suggestions = ()
    return filter_prefix(suggestions, word, casesensitive=casesensitive)


class CommandCompleter(Completer):
    """
    prompt_toolkit completer bound to one commander.

    Each Suggestion becomes a Completion replacing the space-delimited word
    before the cursor, with the description shown as display meta.
    """

    def __init__(self, commander):
        self.commander = commander

    def get_completions(self, document, complete_event):
        word = document.get_word_before_cursor(WORD=True)
        for suggestion in self.commander.complete(document.text_before_cursor, word):
            yield Completion(
                suggestion.text,
                start_position=-len(word),
                display_meta=suggestion.descr,
            )


__all__ = (
    "complete",
    "filter_prefix",
    "CommandCompleter",
)

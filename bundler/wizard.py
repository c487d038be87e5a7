"""
Interactive wizard, without the console.

The create-rsp command asks a fixed sequence of questions. This module holds
the questions, the parsing of each answer, and the step that turns the
ordered answers into a BundleConfig plus the response file path. The CLI
only does the reading and printing, so everything here can be tested by
passing lists of strings.

Parsers raise InvalidAnswerError when the question should simply be asked
again (e.g. 'maybe' to a yes/no question). Any other BundleError ends the
wizard.
"""

import os
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from bundler.config.response_file import RESPONSE_FILE_EXTENSION
from bundler.config.schema import REQUIRED_OUTPUT_EXTENSION, BundleConfig, SortMode
from bundler.errors import (
    InvalidAnswerError,
    InvalidOutputPathError,
    NoLanguagesSpecifiedError,
    ResponseFileError,
)


OUTPUT = "output"
LANGUAGES = "languages"
NOTE = "note"
SORT = "sort"
REMOVE_EMPTY_LINES = "remove_empty_lines"
INCLUDE_AUTHOR = "include_author"
AUTHOR = "author"
RESPONSE_FILE = "response_file"

SORT_CHOICES = {
    1: SortMode.ALPHABETICAL,
    2: SortMode.BY_EXTENSION,
    3: SortMode.NONE,
}


def parse_yes_no(answer: str) -> bool:
    normalized = (answer or "").strip().lower()
    if normalized in ("y", "yes"):
        return True
    if normalized in ("n", "no"):
        return False
    raise InvalidAnswerError("Invalid input. Please enter 'Y' or 'N'.", answer=answer)


def parse_sort_choice(answer: str) -> SortMode:
    try:
        choice = int((answer or "").strip())
    except ValueError:
        choice = None
    if choice not in SORT_CHOICES:
        low, high = min(SORT_CHOICES), max(SORT_CHOICES)
        raise InvalidAnswerError(
            f"Invalid input. Please enter a number between {low} and {high}.",
            answer=answer,
        )
    return SORT_CHOICES[choice]


def parse_output_path(answer: str) -> str:
    """The bundle path must be a .txt file inside an existing directory."""
    path = (answer or "").strip()
    if not path:
        raise InvalidOutputPathError("Invalid output path. Please provide a valid directory.")
    directory = os.path.dirname(path)
    if directory and not os.path.isdir(directory):
        raise InvalidOutputPathError(
            "Invalid output path. Please provide a valid directory.",
            output_path=path,
        )
    if not path.lower().endswith(REQUIRED_OUTPUT_EXTENSION):
        raise InvalidOutputPathError("Output file must be a valid .txt file.", output_path=path)
    return path


def parse_languages(answer: str) -> List[str]:
    """Split on commas and whitespace, dropping empty entries."""
    tokens = [token for token in re.split(r"[,\s]+", answer or "") if token]
    if not tokens:
        raise NoLanguagesSpecifiedError("You must specify at least one language or 'all'.")
    return tokens


def parse_author(answer: str) -> str:
    if not (answer or "").strip():
        raise InvalidAnswerError("Author name cannot be empty.", answer=answer)
    return answer.strip()


def parse_response_path(answer: str) -> str:
    path = (answer or "").strip()
    if not path or not path.lower().endswith(RESPONSE_FILE_EXTENSION):
        raise ResponseFileError(
            "Invalid file path. Please make sure to include a file name with .rsp extension.",
            path=path or None,
        )
    return path


@dataclass(frozen=True)
class Question:
    """One wizard step.

    Attributes:
        key: Name the parsed answer is stored under
        prompt: Text shown to the user
        parse: Turns the raw answer into a value, raising on bad input
    """
    key: str
    prompt: str
    parse: Callable[[str], Any]


QUESTIONS: Tuple[Question, ...] = (
    Question(OUTPUT, "Where do you want the new file to be?", parse_output_path),
    Question(
        LANGUAGES,
        "What languages do you want to bundle? If you want all, write 'all'.",
        parse_languages,
    ),
    Question(
        NOTE,
        "Do you want to write the path of each file in the new file? 'Y' or 'N'",
        parse_yes_no,
    ),
    Question(
        SORT,
        "Do you want to sort the files by 1.abc, 2.type, or 3.not sort at all?",
        parse_sort_choice,
    ),
    Question(REMOVE_EMPTY_LINES, "Do you want to remove empty lines? 'Y' or 'N'", parse_yes_no),
    Question(
        INCLUDE_AUTHOR,
        "Do you want to write the author's name at the top of the file? 'Y' or 'N'",
        parse_yes_no,
    ),
    Question(AUTHOR, "Write the author's name:", parse_author),
    Question(
        RESPONSE_FILE,
        "Where do you want the response file to be? "
        "Provide a full path including the file name (e.g., /path/to/mycli.rsp):",
        parse_response_path,
    ),
)


@dataclass(frozen=True)
class WizardResult:
    """Outcome of a completed wizard.

    Attributes:
        config: The bundle configuration the answers describe
        response_path: Where the response file should be written
    """
    config: BundleConfig
    response_path: str


def _walk(answers: Sequence[str]) -> Tuple[Dict[str, Any], Optional[Question]]:
    """Parse answers in order; return parsed values and the next open question."""
    values: Dict[str, Any] = {}
    remaining = list(answers)
    for question in QUESTIONS:
        # the author's name is only asked for after a 'yes'
        if question.key == AUTHOR and not values.get(INCLUDE_AUTHOR):
            continue
        if not remaining:
            return values, question
        values[question.key] = question.parse(remaining.pop(0))
    if remaining:
        raise InvalidAnswerError(f"Unexpected extra answers: {remaining}")
    return values, None


def next_question(answers: Sequence[str]) -> Optional[Question]:
    """The question to ask after the given answers, or None when done."""
    return _walk(answers)[1]


def build_wizard_result(answers: Sequence[str]) -> WizardResult:
    """Turn a complete, ordered list of raw answers into a WizardResult.

    Raises:
        InvalidAnswerError: an answer is unreadable or the list is incomplete
        InvalidOutputPathError, NoLanguagesSpecifiedError, ResponseFileError:
            the answer cannot be used at all
    """
    values, pending = _walk(answers)
    if pending is not None:
        raise InvalidAnswerError(f"Missing answer for: {pending.prompt}")

    config = BundleConfig(
        output_path=values[OUTPUT],
        languages=values[LANGUAGES],
        include_source_note=values[NOTE],
        sort_mode=values[SORT],
        remove_empty_lines=values[REMOVE_EMPTY_LINES],
        author=values.get(AUTHOR),
    )
    return WizardResult(config=config, response_path=values[RESPONSE_FILE])

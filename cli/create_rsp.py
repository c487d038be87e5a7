"""
Create-RSP Subcommand Module

Asks the bundle questions one at a time on the console and writes the
answers to a response file that can be replayed with '@file.rsp'.
The questions and answer parsing live in bundler.wizard; this module only
reads and prints.
"""

import logging

import click

from bundler.config.response_file import write_response_file
from bundler.errors import BundleError, InvalidAnswerError
from bundler.wizard import Question, build_wizard_result, next_question

from .bundle import prepare_settings, run_bundle
from .shared_options import config_option, log_level_option
from .help_texts import CREATE_RSP_HELP, CREATE_RSP_RUN_HELP, CONFIG_HELP, LOG_LEVEL_HELP, exit_with_error


logger = logging.getLogger(__name__)


def ask(question: Question) -> str:
    """Prompt until the answer parses; fatal answer errors propagate."""
    while True:
        answer = click.prompt(question.prompt, default="", show_default=False, prompt_suffix="\n")
        try:
            question.parse(answer)
        except InvalidAnswerError as e:
            click.echo(e.message)
            continue
        return answer


@click.command(name="create-rsp", help=CREATE_RSP_HELP)
@click.option('--run', 'run_now', is_flag=True, help=CREATE_RSP_RUN_HELP)
@config_option(help=CONFIG_HELP)
@log_level_option(help=LOG_LEVEL_HELP)
def create_rsp(run_now, config, log_level):
    """Interactive wizard that writes a reusable response file."""
    settings = prepare_settings(config, log_level)

    answers = []
    try:
        question = next_question(answers)
        while question is not None:
            answers.append(ask(question))
            question = next_question(answers)

        result = build_wizard_result(answers)
        write_response_file(result.config, result.response_path)
    except BundleError as e:
        exit_with_error(e)

    click.echo(f"Response file created at: {result.response_path}")

    if run_now:
        logger.info("Running bundle from wizard answers")
        try:
            bundle_result = run_bundle(result.config, settings)
        except BundleError as e:
            exit_with_error(e)
        click.echo(f"Bundle file was created at: {bundle_result.output_path}")

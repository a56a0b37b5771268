"""
Run the pathway cards cli using ``python -m pathway_cards.cli compare`` to
compare inference cards (or INDRA statements) with model cards, or
``python -m pathway_cards.cli map-term`` to look up canonical modification
names.
"""

import logging

import click

from pathway_cards.cards import dump_cards, load_cards
from pathway_cards.comparator import CardComparator, summarize_matches
from pathway_cards.comparator.matching import MATCH_FILTERS
from pathway_cards.configs import BaseConfig, ComparatorConfig
from pathway_cards.extractor.vocabulary import map_modification_term
from pathway_cards.resources.constants import OUTPUT_DEFAULT

logger = logging.getLogger(__name__)


@click.group("pathway-cards")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    help="Logging level. Default: INFO.",
)
def main(log_level: str):
    """Run the pathway cards command line tool."""
    logging.basicConfig(level=log_level.upper())


@main.command()
@click.option(
    "--model-cards",
    "model_cards_file",
    type=str,
    required=True,
    help="Path to a JSON file with the index cards of the curated model.",
)
@click.option(
    "--inference-cards",
    "inference_cards_file",
    type=str,
    required=True,
    help="Path to a JSON file with the index cards to compare.",
)
@click.option(
    "--indra",
    "indra_statements",
    is_flag=True,
    help="The inference file holds INDRA statements JSON instead of cards.",
)
@click.option(
    "--output",
    "output_file",
    type=str,
    default=OUTPUT_DEFAULT.as_posix(),
    help=f"Where to write the annotated cards. Default: {OUTPUT_DEFAULT.as_posix()}.",
)
@click.option(
    "--match-filter",
    type=click.Choice(sorted(MATCH_FILTERS)),
    default="strict_pb",
    help="Extra check on candidate model cards. Default: strict_pb.",
)
@click.option("--progress", "show_progress", is_flag=True,
              help="Show a progress bar.")
def compare(**kwargs):
    """Compare inference cards with model cards."""
    base_config = BaseConfig(kwargs)
    comparator = CardComparator(ComparatorConfig(base_config))

    model_cards = load_cards(base_config.model_cards_file)
    if base_config.indra_statements:
        from pathway_cards.cards.indra_cards import load_indra_statement_cards
        inference_cards = load_indra_statement_cards(base_config.inference_cards_file)
    else:
        inference_cards = load_cards(base_config.inference_cards_file)

    updated_cards = comparator.compare_cards(model_cards, inference_cards)
    dump_cards(updated_cards, base_config.output_file)

    n_matched = sum(1 for card in updated_cards if card.match)
    click.echo(f"{n_matched} of {len(updated_cards)} cards matched")
    for match_type, count in sorted(summarize_matches(updated_cards).items()):
        click.echo(f"{match_type}\t{count}")


@main.command("map-term")
@click.argument("terms", nargs=-1, required=True)
def map_term(terms):
    """Print the canonical modification name of each term."""
    for term in terms:
        click.echo(f"{term}\t{map_modification_term(term)}")


if __name__ == "__main__":
    main()

"""
Diagnostic rendering of model tables.

Not a storage format: the text is meant for people, not for parsing.
"""

from rich.console import Console
from rich.table import Table


def _format_probability(value: float) -> str:
    return str(value)


def format_model(model) -> str:
    """
    Tab-separated dump of the transition matrix, the emission matrix and the
    initial probabilities, followed by the final-state label.
    """
    states = model.states
    symbols = model.symbols

    lines = ['A\t' + ''.join(f'{s}\t' for s in states)]
    for source in states:
        row = ''.join(_format_probability(model.transition_probability(source, target)) + '\t'
                      for target in states)
        lines.append(f'{source}\t{row}')

    lines.append('')
    lines.append('B\t' + ''.join(f'{symbol}\t' for symbol in symbols))
    for state in states:
        if state == model.final_state:
            continue
        row = ''.join(_format_probability(model.emission_probability(state, symbol)) + '\t'
                      for symbol in symbols)
        lines.append(f'{state}\t{row}')

    lines.append('')
    lines.append('Initial:')
    for state in states:
        lines.append(f'{state}:\t{_format_probability(model.initial_probability(state))}')

    lines.append('')
    lines.append(f'Final: {model.final_state}')
    return '\n'.join(lines)


def build_tables(model):
    """Build rich tables for transitions, emissions and initial probabilities."""
    states = model.states

    transitions = Table(title="Transition probabilities (A)")
    transitions.add_column("from \\ to", style="bold")
    for target in states:
        transitions.add_column(str(target), justify="right")
    for source in states:
        transitions.add_row(str(source), *[
            _format_probability(model.transition_probability(source, target))
            for target in states
        ])

    emissions = Table(title="Emission probabilities (B)")
    emissions.add_column("state", style="bold")
    for symbol in model.symbols:
        emissions.add_column(str(symbol), justify="right")
    for state in states:
        if state == model.final_state:
            continue
        emissions.add_row(str(state), *[
            _format_probability(model.emission_probability(state, symbol))
            for symbol in model.symbols
        ])

    initial = Table(title="Initial probabilities")
    initial.add_column("state", style="bold")
    initial.add_column("probability", justify="right")
    for state in states:
        initial.add_row(str(state), _format_probability(model.initial_probability(state)))

    return transitions, emissions, initial


def render_model(model, console: Console = None) -> None:
    """Print the model tables and the final state to ``console``."""
    if console is None:
        console = Console()

    for table in build_tables(model):
        console.print(table)
    console.print(f"[bold]Final:[/bold] {model.final_state}")

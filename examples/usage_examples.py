"""
Examples of using hmm-engine.

This file demonstrates building a model by hand, decoding and scoring
items, and training models from raw samples.
"""


def example_explicit_model():
    """Example of decoding and scoring with a hand-built model."""
    from hmm_engine import HiddenMarkovModel

    print("Example: Explicit model")
    print("-" * 40)

    model = HiddenMarkovModel(
        states=['1', '2', '3', 'F'],
        final_state='F',
        symbols=['a', 'b', 'c'],
        initial_probability={'1': 1},
        transition_probability={
            '1': {'1': 0.2, '2': 0.5, '3': 0.3},
            '2': {'1': 0.1, '3': 0.9},
            '3': {'3': 0.4, 'F': 0.6}
        },
        emission_probability={
            '1': {'b': 0.3, 'c': 0.7},
            '2': {'a': 0.3, 'b': 0.6, 'c': 0.1},
            '3': {'a': 1}
        }
    )

    item = ['b', 'c', 'b', 'a']
    result = model.viterbi(item)
    print(f"Item: {item}")
    print(f"Most likely path: {result.path} (p={result.probability})")
    print(f"Forward probability: {model.forward_probability(item)}")
    print()

    model.print()
    print()


def example_training():
    """Example of bootstrapping and refining a model from samples."""
    from hmm_engine import ViterbiTrainer, initialize_model

    print("Example: Training from samples")
    print("-" * 40)

    samples = [
        ['s', 'i', 'i', 'x'],
        ['s', 'i', 'x'],
        ['s', 'i', 'i', 'i', 'x'],
        ['s', 'x']
    ]

    trainer = ViterbiTrainer(max_iterations=50)
    model = initialize_model(samples, 3, trainer=trainer)
    print(f"Segmentation estimate: {trainer.training_stats}")

    trainer.reestimate(model, samples)
    print(f"Viterbi training: {trainer.training_stats}")

    for sample in samples:
        print(f"{sample}: viterbi={model.viterbi_approximation(sample)}, "
              f"forward={model.forward_probability(sample)}")
    print()

    print(model)
    print()


def example_custom_configuration():
    """Example of adjusting configuration."""
    from hmm_engine import HiddenMarkovModel, get_config, set_config, set_log_level

    print("Example: Custom configuration")
    print("-" * 40)

    print(f"Default precision: {get_config('hmm', 'precision')}")
    set_config('hmm', 'precision', 3)

    model = HiddenMarkovModel(
        states=['1', 'F'], final_state='F', symbols=['x'],
        initial_probability={'1': 1.0},
        transition_probability={'1': {'1': 0.3, 'F': 0.7}},
        emission_probability={'1': {'x': 1.0}}
    )
    print(f"P(x x x) at 3 digits: {model.forward_probability(['x', 'x', 'x'])}")

    # Show the scorer's debug records
    set_log_level('DEBUG')
    model.forward_probability(['x'])
    set_log_level('INFO')
    print()


if __name__ == "__main__":
    print("hmm-engine Usage Examples")
    print("=" * 50)
    print()

    example_explicit_model()
    example_training()
    example_custom_configuration()

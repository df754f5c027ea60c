"""
Shared helpers for font providers.
"""

from typing import NamedTuple


class PreparedWeight(NamedTuple):
    """A weight token ready to be requested from a provider."""

    weight: str
    variable: bool = False


def prepare_weights(
    input_weights: list[str],
    has_variable_weights: bool,
    weights: list[str],
) -> list[PreparedWeight]:
    """Reconcile requested weights with the weights a family declares.

    Args:
        input_weights: Requested weights, either fixed ("400") or a
            space-separated range ("100 900")
        has_variable_weights: Whether the family has a `wght` axis
        weights: Weight keys declared by the family

    Returns:
        Unique weights in request order. Ranges stay a single variable token
        for variable families and expand to the declared weights they cover
        otherwise; fixed weights the family lacks are dropped.
    """
    collected: list[str] = []

    for weight in input_weights:
        if " " in weight:
            if has_variable_weights:
                collected.append(weight)
                continue

            low, high = (float(bound) for bound in weight.split(" ", 1))
            collected.extend(
                declared
                for declared in weights
                if declared.isdigit() and low <= int(declared) <= high
            )
            continue

        if weight in weights:
            collected.append(weight)

    return [PreparedWeight(weight, " " in weight) for weight in dict.fromkeys(collected)]

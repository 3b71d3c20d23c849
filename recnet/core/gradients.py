# core/gradients.py - Output error and the rotating output-gradient history
from .layer import Layer, TimeRing


class GradientHistory(TimeRing):
    """Output gradients (target - prediction) of the last ``steps`` samples.

    Prediction-only samples contribute a zero gradient.
    """

    def __init__(self, steps: int):
        super().__init__(steps)

    def __getitem__(self, t: int) -> float:
        return float(super().__getitem__(t))

    def clear(self) -> None:
        self.fill(0.0)


def compute_output_error(output_layer: Layer, target: float, history: GradientHistory) -> float:
    """Set the output error to ``target - prediction`` and record it.

    Returns the unweighted squared-error loss ``0.5 * g**2``.
    """
    out = output_layer.output.newest[0]
    g = target - out
    output_layer.error[0] = g
    history.push(g)
    return float(0.5 * g * g)

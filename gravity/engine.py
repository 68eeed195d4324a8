"""
Field aggregator: sums body contributions and applies display scaling.

ARCHITECTURE RULE: bodies return raw SI values; this module is the ONLY
place the display scale (FieldComponent.scale) is applied, and it is
applied exactly once, after summation over all bodies. Never scale per
body.

This module provides:
    evaluate       - raw contribution of one body to one component
    evaluate_all   - scaled sum over a body collection
    laplacian      - scaled Gxx + Gyy + Gzz diagnostic
    EngineConfig   - bodies, observation points and requested components
    BodyContribution - raw per-body series for one component
    FieldEngine    - runs a config and produces a FieldResult
    FieldResult    - aggregated output with serialization methods

The computation is pure: body parameters and points are read, never
mutated, and every call allocates its own result arrays. Summation
runs in body-list order so repeated runs are bit-for-bit identical.

IMPORTANT: No unicode characters allowed (Windows charmap constraint).
"""

import logging
from collections import OrderedDict

import numpy as np

from gravity.components import FieldComponent, DIAGONAL_COMPONENTS
from gravity.constants import MAX_BODIES, MAX_POINTS
from gravity.survey import as_points

log = logging.getLogger(__name__)


def evaluate(body, component, points):
    """
    Raw (unscaled) contribution of one body to one field component.

    Parameters
    ----------
    body : GravityBody
    component : FieldComponent or str
    points : array_like, shape (3,) or (N, 3)

    Returns
    -------
    ndarray, shape (N,)
        SI values; NaN where the point is singular for this body.
    """
    return body.calculate(FieldComponent.parse(component), as_points(points))


def evaluate_all(bodies, component, points):
    """
    Scaled field of a body collection at every point.

    Sums raw contributions in body order, then multiplies by the
    component's display scale once (-1e8 for Gx/Gy/Gz, 1e9 for the
    tensor). A NaN contribution poisons only its own sample.

    Parameters
    ----------
    bodies : sequence of GravityBody
    component : FieldComponent or str
    points : array_like, shape (3,) or (N, 3)

    Returns
    -------
    ndarray, shape (N,)
    """
    component = FieldComponent.parse(component)
    points = as_points(points)
    total = np.zeros(len(points))
    for body in bodies:
        total += body.calculate(component, points)
    return total * component.scale


def laplacian(bodies, points):
    """
    Scaled Gxx + Gyy + Gzz. Zero (to rounding) outside every body.

    Returns
    -------
    ndarray, shape (N,)
    """
    points = as_points(points)
    return sum(evaluate_all(bodies, c, points) for c in DIAGONAL_COMPONENTS)


class EngineConfig:
    """
    Evaluation request: which bodies, where, and which components.

    Parameters
    ----------
    bodies : sequence of GravityBody
        Source bodies; summed in this order. At most MAX_BODIES.
    points : array_like, shape (N, 3)
        Observation points. At most MAX_POINTS.
    components : sequence of FieldComponent or str, optional
        Components to evaluate (default: Gz only). Duplicates are
        dropped, order is kept.

    Raises
    ------
    ValueError
        If a limit is exceeded, a component is unknown or the points
        are malformed.
    """

    def __init__(self, bodies, points, components=None):
        self.bodies = list(bodies)
        if len(self.bodies) > MAX_BODIES:
            raise ValueError(
                "At most {} bodies per evaluation, got {}".format(MAX_BODIES, len(self.bodies))
            )
        self.points = as_points(points)
        if len(self.points) > MAX_POINTS:
            raise ValueError(
                "At most {} observation points per evaluation, got {}".format(
                    MAX_POINTS, len(self.points))
            )
        if components is None:
            components = [FieldComponent.GZ]
        parsed = []
        for c in components:
            c = FieldComponent.parse(c)
            if c not in parsed:
                parsed.append(c)
        if not parsed:
            raise ValueError("At least one field component is required")
        self.components = parsed

    def to_dict(self):
        """Serialize config for inclusion in verbose output."""
        return {
            "bodies": [b.to_dict() for b in self.bodies],
            "points": self.points.tolist(),
            "components": [c.label for c in self.components],
        }


class BodyContribution:
    """
    Raw field of one body for one component at every point.

    Parameters
    ----------
    index : int
        Position of the body in the config.
    body : GravityBody
    component : FieldComponent
    series : ndarray, shape (N,)
        Unscaled SI values.
    """

    def __init__(self, index, body, component, series):
        self.index = index
        self.body = body
        self.component = component
        self.series = series

    def to_dict(self):
        """Serialize the contribution trace for verbose output."""
        return {
            "index": self.index,
            "body": self.body.to_dict(),
            "component": self.component.label,
            "raw": _json_series(self.series),
        }


class FieldResult:
    """
    Aggregated output of a FieldEngine run.

    Parameters
    ----------
    config : EngineConfig
    totals : OrderedDict
        Component -> scaled aggregate series, in request order.
    contributions : OrderedDict
        Component -> list of BodyContribution, in body order.
    """

    def __init__(self, config, totals, contributions):
        self.config = config
        self.totals = totals
        self.contributions = contributions

    def values(self, component):
        """
        Scaled aggregate series for a component.

        Raises
        ------
        KeyError
            If the component was not requested.
        """
        return self.totals[FieldComponent.parse(component)]

    @property
    def nan_count(self):
        """Number of NaN samples across all requested components."""
        return int(sum(np.count_nonzero(np.isnan(v)) for v in self.totals.values()))

    def laplacian_residual(self):
        """Gxx + Gyy + Gzz if all three were requested, else None."""
        if not all(c in self.totals for c in DIAGONAL_COMPONENTS):
            return None
        return sum(self.totals[c] for c in DIAGONAL_COMPONENTS)

    def to_api_response(self):
        """
        Flat dict for the API: points plus one series per component.

        NaN samples (singular queries) are emitted as null.
        """
        response = {
            "points": self.config.points.tolist(),
            "values": OrderedDict(
                (c.label, _json_series(v)) for c, v in self.totals.items()
            ),
            "units": OrderedDict((c.label, c.unit) for c in self.totals),
            "nan_count": self.nan_count,
        }
        residual = self.laplacian_residual()
        if residual is not None:
            response["laplacian"] = _json_series(residual)
        return response

    def to_verbose_response(self):
        """Full trace: config, scaled totals and raw per-body series."""
        response = self.to_api_response()
        response["config"] = self.config.to_dict()
        response["contributions"] = OrderedDict(
            (c.label, [b.to_dict() for b in items])
            for c, items in self.contributions.items()
        )
        return response


class FieldEngine:
    """
    Runs an EngineConfig: every component, every body, every point.

    Usage:
        result = FieldEngine(EngineConfig(bodies, points, ["gz", "gzz"])).run()
        result.values("gz")
    """

    def __init__(self, config):
        self.config = config

    def run(self):
        """
        Evaluate all requested components.

        Each component's aggregate equals evaluate_all() on the same
        inputs; the per-body raw series are kept for tracing.

        Returns
        -------
        FieldResult
        """
        config = self.config
        log.debug(
            "Evaluating %d component(s) for %d bodies at %d points",
            len(config.components), len(config.bodies), len(config.points),
        )
        totals = OrderedDict()
        contributions = OrderedDict()
        for component in config.components:
            total = np.zeros(len(config.points))
            items = []
            for i, body in enumerate(config.bodies):
                series = evaluate(body, component, config.points)
                items.append(BodyContribution(i, body, component, series))
                total += series
            totals[component] = total * component.scale
            contributions[component] = items

        result = FieldResult(config, totals, contributions)
        if result.nan_count:
            log.warning(
                "Evaluation produced %d NaN sample(s): observation point on a body vertex or centre",
                result.nan_count,
            )
        return result


def _json_series(values):
    """Floats for JSON; NaN becomes None."""
    return [None if np.isnan(v) else float(v) for v in values]

import math
from typing import Any, Mapping, Sequence, Union

from .config import LayoutConfig
from .hierarchy import Hierarchy, hierarchy_from_dict


class ValidationError(Exception):
    pass


def _finite(value: float) -> bool:
    return isinstance(value, (int, float)) and math.isfinite(value)


def validate_config(config: LayoutConfig) -> None:
    if not (config.root_radius > config.cause_radius > config.sub_radius > 0):
        raise ValidationError(
            f'radii must satisfy root > cause > sub > 0 (got {config.root_radius}, '
            f'{config.cause_radius}, {config.sub_radius})'
        )
    for name in ('margin', 'padding', 'root_cause_distance', 'cause_sub_distance', 'sub_spread'):
        value = getattr(config, name)
        if not _finite(value) or value < 0:
            raise ValidationError(f'{name} must be a non-negative number (got {value!r})')
    if config.iterations < 0:
        raise ValidationError(f'iterations must be non-negative (got {config.iterations})')
    if not (config.epsilon > 0):
        raise ValidationError(f'epsilon must be positive (got {config.epsilon})')
    if not (0 < config.min_zoom <= config.max_zoom):
        raise ValidationError(f'zoom range must satisfy 0 < min <= max (got {config.min_zoom}..{config.max_zoom})')
    if not (config.wheel_base > 1.0 and config.zoom_step > 1.0):
        raise ValidationError('wheel_base and zoom_step must be greater than 1')
    span = 2 * (config.root_radius + config.margin)
    if config.canvas_width < span or config.canvas_height < span:
        raise ValidationError(
            f'canvas {config.canvas_width}x{config.canvas_height} cannot hold a root of radius {config.root_radius}'
        )


def validate_hierarchy(hierarchy: Hierarchy) -> None:
    if not hierarchy.trees:
        raise ValidationError('hierarchy needs at least one tree')
    for t, tree in enumerate(hierarchy.trees):
        if not isinstance(tree.label, str):
            raise ValidationError(f'tree {t}: label must be a string')
        if not (_finite(tree.position[0]) and _finite(tree.position[1])):
            raise ValidationError(f'tree {t}: position must be finite (got {tree.position!r})')
        if not (_finite(tree.arc[0]) and _finite(tree.arc[1])):
            raise ValidationError(f'tree {t}: arc must be finite (got {tree.arc!r})')
        for i, cause in enumerate(tree.causes):
            if not isinstance(cause.label, str):
                raise ValidationError(f'tree {t} cause {i}: label must be a string')
            for j, sub in enumerate(cause.subs):
                if not isinstance(sub.label, str):
                    raise ValidationError(f'tree {t} cause {i} sub {j}: label must be a string')


def parse_and_validate(data: Union[Sequence[Mapping[str, Any]], Mapping[str, Any]]) -> Hierarchy:
    try:
        hierarchy = hierarchy_from_dict(data)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    validate_hierarchy(hierarchy)
    return hierarchy

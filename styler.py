"""Choropleth styling and popup text for LGA features."""

import html
import logging
import math
from bisect import bisect_right
from decimal import Decimal, ROUND_HALF_UP

from config import (
    CATEGORY_PHRASES,
    MULTI_NEED_BREAKS,
    MULTI_NEED_COLORS,
    MULTI_NEED_DECIMALS,
    TARGET_YEAR,
)
from models import Feature, Style

logger = logging.getLogger(__name__)

# A threshold scale with n colours only consults the first n - 1 breaks;
# everything at or past the last of those takes the final colour.
_ACTIVE_BREAKS = MULTI_NEED_BREAKS[: len(MULTI_NEED_COLORS) - 1]


class FormatError(ValueError):
    """A feature property is missing or cannot be read as a number."""


def _label(feature: Feature) -> str:
    return feature.LGA if feature.LGA is not None else "<unnamed LGA>"


def number_property(feature: Feature, name: str) -> float:
    """Read a numeric property, coercing numeric strings."""
    value = getattr(feature, name)
    if value is None:
        raise FormatError(f"{_label(feature)}: missing {name}")
    if isinstance(value, bool):
        raise FormatError(f"{_label(feature)}: {name} is not numeric: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            raise FormatError(f"{_label(feature)}: {name} is out of range: {value!r}") from None
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise FormatError(f"{_label(feature)}: {name} is not numeric: {value!r}")


def _name(feature: Feature) -> str:
    if feature.LGA is None:
        raise FormatError("feature has no LGA name")
    return html.escape(str(feature.LGA))


def round_to(value: float, decimals: int) -> float:
    """Round to `decimals` places by shifting the decimal exponent.

    Works on the shortest decimal representation of `value` so 1.0005 rounds
    to 1.001 rather than falling foul of its binary expansion. Halves round
    away from zero. NaN and infinities pass through unchanged.
    """
    if not math.isfinite(value):
        return value
    shifted = Decimal(repr(float(value))).scaleb(decimals)
    rounded = shifted.to_integral_value(rounding=ROUND_HALF_UP)
    return float(rounded.scaleb(-decimals))


def color_for(multi_need: float) -> str:
    """Fill colour for a (rounded) MultiNeed value.

    Break values belong to the bucket above them. Values below the first
    break get the first colour and values past the last active break get
    the last.
    """
    if not math.isfinite(multi_need):
        raise FormatError(f"MultiNeed is not finite: {multi_need!r}")
    return MULTI_NEED_COLORS[bisect_right(_ACTIVE_BREAKS, multi_need)]


def legend_entries() -> list[tuple[str, str]]:
    """(label, colour) pairs for each bucket, best to worst."""
    entries = [(f"below {_ACTIVE_BREAKS[0]:g}x", MULTI_NEED_COLORS[0])]
    for i, lo in enumerate(_ACTIVE_BREAKS):
        color = MULTI_NEED_COLORS[i + 1]
        if i + 1 < len(_ACTIVE_BREAKS):
            entries.append((f"{lo:g}x to {_ACTIVE_BREAKS[i + 1]:g}x", color))
        else:
            entries.append((f"{lo:g}x and above", color))
    return entries


def style_for(feature: Feature) -> Style:
    multi_need = round_to(number_property(feature, "MultiNeed"), MULTI_NEED_DECIMALS)
    fill_color = color_for(multi_need)
    logger.debug("%s: MultiNeed %s -> %s", _label(feature), multi_need, fill_color)
    return Style(fill_color=fill_color)


def category_phrase(cat) -> str:
    """Describe a tracking category (1 best, 5 worst); unknown values give ''."""
    if isinstance(cat, bool):
        return ""
    try:
        return CATEGORY_PHRASES.get(cat, "")
    except TypeError:
        return ""


def _grouped(value: float) -> str:
    return f"{round_to(value, 0):,.0f}"


def hover_summary(feature: Feature) -> str:
    """Short popup shown while the pointer is over an LGA.

    The signed percentage is shown on both sides of the target, so -0.12
    reads "Tracking -12% below".
    """
    shortfall = number_property(feature, "Shortfall")
    pct = round_to(shortfall * 100, 0)
    direction = "above" if shortfall >= 0 else "below"
    tracking = f"Tracking {pct:.0f}% {direction} {TARGET_YEAR} target"
    return (
        f'<div class="popup-header">{_name(feature)}</div>'
        f'<div class="centered-text">{tracking}</div>'
    )


def click_detail(feature: Feature) -> str:
    """Full statistics popup shown when an LGA is clicked."""
    name = _name(feature)
    curr = number_property(feature, "Curr")
    add = number_property(feature, "Add")
    pc_inc = number_property(feature, "PcInc")
    req_yearly = number_property(feature, "ReqYearly")
    hist_yearly = number_property(feature, "HistYearly")
    multi_need = number_property(feature, "MultiNeed")

    def attr(text: str) -> str:
        return f'<span class="dynamic-attribute">{text}</span>'

    parts = [
        f'<div class="popup-header">{name}</div>',
        f"<p>Current dwellings: {attr(_grouped(curr))}</p>",
        f"<p>{TARGET_YEAR} target: {attr(_grouped(curr + add))}</p>",
        f"<p>The {TARGET_YEAR} target calls for an additional {attr(_grouped(add))} dwellings, "
        f"a {attr(f'{round_to(pc_inc * 100, 0):.0f}%')} increase, "
        f"or {attr(_grouped(req_yearly))} dwellings every year until the end of {TARGET_YEAR}.</p>",
        f"<p>Based on the last 10 years of dwelling construction in {name}, "
        f"{attr(_grouped(hist_yearly))} per year were constructed, "
        f"so the {TARGET_YEAR} target requires new dwellings to be built at "
        f"{attr(f'{round_to(multi_need, 1):.1f}x')} the historical rate.</p>",
        f"<p>So {name} is {attr(category_phrase(feature.Cat))} {TARGET_YEAR} target.</p>",
    ]
    return "\n".join(parts)

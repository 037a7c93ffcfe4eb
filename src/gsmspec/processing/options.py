import ast
import re
from typing import Any, Dict, List

from ..config.rules import (
    CHECKBOX,
    MULTI_SELECT,
    OS_VERSION_LABEL,
    OS_VERSION_VARIABLE,
    RANGE_DEFAULT_MAX,
    RANGE_DEFAULT_MIN,
    RANGE_SLIDER,
    SINGLE_SELECT,
)
from ..errors import StructuralParseError
from ..models import (
    AdvancedSearchOption,
    BaseOption,
    CheckboxOption,
    MultiSelectOption,
    RangeOption,
    SelectOption,
    SelectOptionDivided,
)
from ..utils.logging import get_logger
from .dom import attr_of, previous_label, select, text_of

logger = get_logger(__name__)

_BARE_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_$][\w$]*)\s*:")
_JS_CONSTANTS = (
    (re.compile(r"\btrue\b"), "True"),
    (re.compile(r"\bfalse\b"), "False"),
    (re.compile(r"\bnull\b"), "None"),
)


def parse_js_literal(source: str) -> Any:
    """
    Evaluate a JS object/array literal made of strings, numbers and booleans.

    {Android: [["Android 14", 214]], 'iOS': [["iOS 17", 300],]}
      -> {"Android": [["Android 14", 214]], "iOS": [["iOS 17", 300]]}
    """
    text = _BARE_KEY_RE.sub(r'\1"\2":', source)
    for pattern, replacement in _JS_CONSTANTS:
        text = pattern.sub(replacement, text)
    try:
        return ast.literal_eval(text)
    except (SyntaxError, ValueError) as exc:
        raise StructuralParseError(f"unparsable JS literal: {exc}") from exc


def get_os_version_names(soup) -> Dict[str, List[Any]]:
    """The ``osVersionNames`` object embedded in the search page, {} if absent."""
    pattern = re.compile(
        r"var\s+" + re.escape(OS_VERSION_VARIABLE) + r"\s*=\s*({[\s\S]*?});"
    )
    for script in select(soup, "script"):
        content = script.string or script.get_text()
        if not content or OS_VERSION_VARIABLE not in content:
            continue
        m = pattern.search(content)
        if not m:
            continue
        names = parse_js_literal(m.group(1))
        if not isinstance(names, dict):
            raise StructuralParseError(f"{OS_VERSION_VARIABLE} is not an object")
        return names

    logger.warning("No %s script found, OS versions left empty", OS_VERSION_VARIABLE)
    return {}


def _select_values(select_tag) -> List[BaseOption]:
    values = []
    for option in select_tag.find_all("option"):
        value = attr_of(option, "value")
        label = text_of(option)
        if value and label:
            values.append(BaseOption(name=value, label=label))
    return values


def _os_versions(soup, label: str) -> SelectOptionDivided:
    divided = SelectOptionDivided(name=label)
    for vendor, entries in get_os_version_names(soup).items():
        # each entry is [label, value]
        divided.values[str(vendor)] = [
            BaseOption(name=str(entry[1]), label=str(entry[0]))
            for entry in entries
            if isinstance(entry, (list, tuple)) and len(entry) >= 2
        ]
    return divided


def _is_checked(checkbox) -> bool:
    if not checkbox.has_attr("checked"):
        return False
    return attr_of(checkbox, "checked").lower() != "false"


def read_search_options(soup) -> List[AdvancedSearchOption]:
    """Describe every control of the advanced search form.

    Order: multi-selects, single-selects, range sliders, checkboxes.
    """
    options: List[AdvancedSearchOption] = []

    for tag in select(soup, MULTI_SELECT):
        options.append(MultiSelectOption(name=previous_label(tag), values=_select_values(tag)))

    for tag in select(soup, SINGLE_SELECT):
        label = previous_label(tag)
        if label == OS_VERSION_LABEL:
            options.append(_os_versions(soup, label))
        else:
            options.append(SelectOption(name=label, values=_select_values(tag)))

    for tag in select(soup, RANGE_SLIDER):
        options.append(
            RangeOption(name=previous_label(tag), min=RANGE_DEFAULT_MIN, max=RANGE_DEFAULT_MAX)
        )

    for tag in select(soup, CHECKBOX):
        options.append(CheckboxOption(name=previous_label(tag), selected=_is_checked(tag)))

    return options

"""
Item customization: default choices, modifier toggling and validation of a
submitted selection against the catalog.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from storefront.errors import InvalidSelectionError
from storefront.models.menu import ItemOption, Menu, MenuItem
from storefront.pricing import ModifierSelection


def default_option(item: MenuItem) -> Optional[ItemOption]:
    """The first option is pre-selected on items that have options."""
    return item.options[0] if item.options else None


def default_modifiers(item: MenuItem) -> ModifierSelection:
    """Required groups start on their first choice, optional groups empty."""
    selection = {}
    for group_name, group in item.modifiers.items():
        if group.required and group.options:
            selection[group_name] = [group.options[0].name]
        else:
            selection[group_name] = []
    return selection


def initial_selections(menu: Menu) -> Tuple[Dict[str, ItemOption], Dict[str, ModifierSelection]]:
    """
    Default customization for every item in the catalog.

    Returns:
        (options keyed by item name, modifier selections keyed by item name)
    """
    options = {}
    modifiers = {}
    for item in menu.get_all_items():
        option = default_option(item)
        if option is not None:
            options[item.name] = option
        if item.modifiers:
            modifiers[item.name] = default_modifiers(item)
    return options, modifiers


def toggle_modifier(item: MenuItem, group_name: str, choice_name: str, current: List[str]) -> List[str]:
    """
    New choice list for a group after the visitor taps a choice.

    A selected choice is removed. Single-choice groups swap to the new
    choice; multi-choice groups append only while under their limit.
    """
    if choice_name in current:
        return [name for name in current if name != choice_name]

    group = item.modifiers.get(group_name)
    max_selections = group.max_selections if group else 1

    if max_selections == 1:
        return [choice_name]
    if len(current) < max_selections:
        return current + [choice_name]
    return list(current)


def parse_modifier_fields(values: Iterable[str]) -> ModifierSelection:
    """
    Decode repeated ``group::choice`` form values into a selection.

    Choice order within a group follows submission order; duplicates are dropped.
    """
    selection: ModifierSelection = {}
    for value in values:
        group_name, sep, choice_name = value.partition("::")
        if not sep or not group_name or not choice_name:
            raise InvalidSelectionError(f"Malformed modifier value: {value!r}")
        choices = selection.setdefault(group_name, [])
        if choice_name not in choices:
            choices.append(choice_name)
    return selection


def validate_selection(
    item: MenuItem,
    option_name: Optional[str],
    modifiers: Optional[ModifierSelection],
    enable_options: bool = True,
    enable_modifiers: bool = True,
) -> Tuple[Optional[ItemOption], ModifierSelection]:
    """
    Resolve a submitted customization against the item.

    Args:
        item: The catalog item being added
        option_name: Chosen size/variant; the first option when omitted
        modifiers: Chosen add-ons by group
        enable_options: Feature toggle; options are ignored when off
        enable_modifiers: Feature toggle; modifiers are ignored when off

    Returns:
        The resolved option and a selection listing every group of the item

    Raises:
        InvalidSelectionError: Unknown option, group or choice, too many
            choices, or a required group left empty
    """
    option = None
    if enable_options and item.options:
        if option_name:
            option = item.find_option(option_name)
            if option is None:
                raise InvalidSelectionError(f"'{item.name}' has no option '{option_name}'")
        else:
            option = default_option(item)
    elif option_name and enable_options:
        raise InvalidSelectionError(f"'{item.name}' has no options")

    if not enable_modifiers:
        return option, {}

    submitted = modifiers or {}
    for group_name in submitted:
        if group_name not in item.modifiers:
            raise InvalidSelectionError(f"'{item.name}' has no modifier group '{group_name}'")

    resolved: ModifierSelection = {}
    for group_name, group in item.modifiers.items():
        choices = list(submitted.get(group_name, []))
        for choice_name in choices:
            if group.find_option(choice_name) is None:
                raise InvalidSelectionError(f"'{group_name}' has no choice '{choice_name}'")
        if len(choices) > group.max_selections:
            raise InvalidSelectionError(
                f"'{group_name}' allows at most {group.max_selections} choice(s)"
            )
        if group.required and not choices:
            raise InvalidSelectionError(f"'{group_name}' is required")
        resolved[group_name] = choices

    return option, resolved

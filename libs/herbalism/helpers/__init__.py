from herbalism.helpers.dice import (
    default_rng,
    resolve_check,
    roll_d4,
    roll_d20,
    roll_die,
    roll_quantity,
    weighted_sample,
)
from herbalism.helpers.templates import (
    TemplateVariable,
    all_choices_made,
    collect_required_choices,
    compute_description,
    fill_template,
    is_choice_made,
    parse_template_variables,
)

__all__ = [
    "TemplateVariable",
    "all_choices_made",
    "collect_required_choices",
    "compute_description",
    "default_rng",
    "fill_template",
    "is_choice_made",
    "parse_template_variables",
    "resolve_check",
    "roll_d20",
    "roll_d4",
    "roll_die",
    "roll_quantity",
    "weighted_sample",
]

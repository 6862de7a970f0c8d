from virtualgroups.core.models import SortOrder
from virtualgroups.core.text_compare import casefold_compare, locale_compare, natural_compare

ORDER_ALIASES = {
    "asc": SortOrder.ASCENDING,
    "ascending": SortOrder.ASCENDING,
    "desc": SortOrder.DESCENDING,
    "descending": SortOrder.DESCENDING,
    "none": SortOrder.NONE,
}

ORDER_CHOICES = list(ORDER_ALIASES.keys())

ORDER_HELP_TEXT = (
    "Sort direction:\n"
    "  asc  : Ascending (missing values last)\n"
    "  desc : Descending (missing values still last)\n"
    "  none : Keep the order of the input file\n"
)

TEXT_COMPARE_ALIASES = {
    "casefold": casefold_compare,
    "locale": locale_compare,
    "natural": natural_compare,
}

TEXT_COMPARE_CHOICES = list(TEXT_COMPARE_ALIASES.keys())

TEXT_COMPARE_HELP_TEXT = (
    "How text values and group titles are compared:\n"
    "  casefold : Case-insensitive (default)\n"
    "  locale   : Case-insensitive, using the collation of the current locale\n"
    "  natural  : Case-insensitive, numbers inside text compare by value (item2 < item10)\n"
)

FORMAT_CHOICES = ["json", "csv"]

EPILOG_TEXT = """
Examples:
  Group people by department
  %(prog)s -i people.json -g dept

  Group by department, newest hire first inside each department, then by name
  %(prog)s -i people.json -g dept -s year --sort-order desc -t name

  Show the number of items in every group title
  %(prog)s -i people.csv -g dept --show-counts

  Custom title format ({0} = group title, {1} = item count)
  %(prog)s -i people.csv -g dept --title-format "{0}: {1} people" --title-singular-format "{0}: one person"

  Group by first letter of the name, machine-readable output
  %(prog)s -i people.json -g name --initial-letter --json > groups.json
"""

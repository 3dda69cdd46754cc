WIZARD_SECTION_PREFIX = "wiz:section:"
WIZARD_FIELD_PREFIX = "wiz:field:"
WIZARD_TOGGLE_PREFIX = "wiz:toggle:"
WIZARD_CATEGORY_PREFIX = "wiz:category:"
WIZARD_TAG_ADD = "wiz:tag:add"
WIZARD_TAG_REMOVE_PREFIX = "wiz:tag:remove:"
WIZARD_TICKET_ADD = "wiz:ticket:add"
WIZARD_TICKET_FIELD_PREFIX = "wiz:ticket:field:"
WIZARD_TICKET_SELECT_PREFIX = "wiz:ticket:select:"
WIZARD_TICKET_REMOVE_PREFIX = "wiz:ticket:remove:"
WIZARD_COVER_REMOVE = "wiz:cover:remove"
WIZARD_SUBMIT = "wiz:submit"
WIZARD_CANCEL = "wiz:cancel"
WIZARD_INPUT_CANCEL = "wiz:input:cancel"


def wizard_section(section: str) -> str:
    return f"{WIZARD_SECTION_PREFIX}{section}"


def wizard_field(field: str) -> str:
    return f"{WIZARD_FIELD_PREFIX}{field}"


def wizard_toggle(field: str) -> str:
    return f"{WIZARD_TOGGLE_PREFIX}{field}"


def wizard_category(index: int) -> str:
    return f"{WIZARD_CATEGORY_PREFIX}{index}"


def wizard_tag_remove(index: int) -> str:
    return f"{WIZARD_TAG_REMOVE_PREFIX}{index}"


def wizard_ticket_field(index: int, field: str) -> str:
    return f"{WIZARD_TICKET_FIELD_PREFIX}{index}:{field}"


def wizard_ticket_select(index: int) -> str:
    return f"{WIZARD_TICKET_SELECT_PREFIX}{index}"


def wizard_ticket_remove(index: int) -> str:
    return f"{WIZARD_TICKET_REMOVE_PREFIX}{index}"


def extract_value(data: str, prefix: str) -> str:
    return data.removeprefix(prefix)


def extract_index(data: str, prefix: str) -> int:
    return int(data.removeprefix(prefix))


def extract_index_and_field(data: str, prefix: str) -> tuple[int, str]:
    payload = data.removeprefix(prefix)
    index_str, field = payload.split(":", 1)
    return int(index_str), field

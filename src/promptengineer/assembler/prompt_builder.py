"""Request assembly from the prompt form fields."""

from promptengineer.schemas.fields import FieldSet

SYSTEM_MESSAGE = """You are an advanced AI assistant specialized in generating tailored prompts. Your task is to create a prompt based on the provided parameters. Follow these guidelines:

1. Analyze the given role, topic, goal, and expertise level to understand the context.
2. Craft a prompt that is specific, clear, and aligned with the stated goal.
3. Adjust the language and complexity to match the specified expertise level.
4. Incorporate any additional details provided to make the prompt more focused and relevant.
5. Ensure the generated prompt follows the requested output format.
6. Be concise yet comprehensive, providing enough information to guide the response without being overly restrictive.
7. If appropriate, include suggestions for potential areas to explore or aspects to consider in the response.
8. Avoid biases and maintain a neutral tone unless otherwise specified.
9. If the topic is sensitive or controversial, approach it with care and objectivity.

Your output should be a well-structured, thoughtful prompt that effectively captures all the provided parameters and guides the user towards producing the desired content or solution."""

USER_MESSAGE_HEADER = "Generate a prompt with the following parameters:"

# Optional fields in the order they appear in the user message
OPTIONAL_FIELD_LABELS: tuple[tuple[str, str], ...] = (
    ("role", "Role"),
    ("topic", "Topic"),
    ("goal", "Goal"),
    ("output_format", "Output Format"),
    ("expertise_level", "Expertise Level"),
    ("details", "Additional Details"),
)


def format_parameter(label: str, value: str) -> str:
    """Render one labeled parameter line."""
    return f'- {label}: "{value}"'


def build_parameter_lines(fields: FieldSet) -> list[str]:
    """
    Build the labeled parameter lines for a field set.

    The prompt line always comes first. Optional fields follow in a fixed
    order and are left out entirely when empty.

    Args:
        fields: Current form values

    Returns:
        List of labeled lines
    """
    lines = [format_parameter("Prompt", fields.prompt)]
    for name, label in OPTIONAL_FIELD_LABELS:
        value = getattr(fields, name)
        if value:
            lines.append(format_parameter(label, value))
    return lines


def build_user_message(fields: FieldSet) -> str:
    """Build the user instruction for a field set."""
    return "\n".join([USER_MESSAGE_HEADER, *build_parameter_lines(fields)])


def build_messages(fields: FieldSet) -> list[dict[str, str]]:
    """
    Build the two-message chat request for a field set.

    Args:
        fields: Current form values

    Returns:
        System message followed by user message, in chat-completions format
    """
    return [
        {"role": "system", "content": SYSTEM_MESSAGE},
        {"role": "user", "content": build_user_message(fields)},
    ]

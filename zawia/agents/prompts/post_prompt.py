"""Prompt template for turning a raw idea into a platform-ready post.

Projects the workspace compass, the idea and the chosen platform/post type
into one instruction block for a generative text model. Pure: the same
arguments always give the same string, so it is safe to re-render on every
keystroke for a live preview.

Every line is always present; missing values render as NOT_SPECIFIED so
the output keeps the same shape. The one exception is the post-type detail
section, which appears only when at least one field has a value.
"""

from collections.abc import Mapping

from zawia.models.common import CONTENT_TYPE_LABELS, ContentType, Platform
from zawia.models.compass import Compass, ContentPillar
from zawia.models.post_types import get_post_type

NOT_SPECIFIED = "غير محدد"
NONE_LISTED = "لا يوجد"

_OUTPUT_INSTRUCTIONS = (
    "1.  قم بصياغة محتوى المنشور ليتوافق تماماً مع شخصية ونبرة صوت علامتنا التجارية.",
    "2.  تأكد من أن المحتوى يخدم الهدف المحدد للمنصة والهدف العام للمنشور.",
    '3.  إذا كان نوع المنشور "نصي"، فقدم نصاً جذاباً. إذا كان "صورة" أو "فيديو"، '
    "فاقترح نصاً مرافقاً (Caption) قوياً ووصفاً للفكرة المرئية.",
    "4.  قدم المخرج كنص نهائي وجاهز للنسخ بدون أي شروحات أو مقدمات إضافية.",
)


def _or(value: str | None, fallback: str = NOT_SPECIFIED) -> str:
    return value if value else fallback


def _field_lines(
    platform: Platform,
    post_type_id: str | None,
    post_field_values: Mapping[str, str] | None,
) -> list[str]:
    post_type = get_post_type(platform, post_type_id)
    if post_type is None or not post_field_values:
        return []
    lines = []
    for field in post_type.fields:
        value = post_field_values.get(field.id)
        if value:
            lines.append(f'- {field.label}: "{value}"')
    return lines


def render_prompt(
    idea_text: str,
    content_type: ContentType | None,
    pillar: ContentPillar | None,
    platform: Platform | None,
    post_type_id: str | None,
    post_field_values: Mapping[str, str] | None,
    compass: Compass | None,
) -> str:
    """Build the post-drafting prompt, or "" when platform, content type
    or pillar is missing."""
    if not platform or not content_type or not pillar:
        return ""

    goals = compass.goals if compass else None
    tone = compass.tone if compass else None
    personas = ", ".join(p.name for p in compass.personas) if compass else ""
    strategy = compass.channel_strategy_for(platform) if compass else None
    post_type = get_post_type(platform, post_type_id)

    lines = [
        "# الدور (Role)",
        "أنت خبير استراتيجي في صناعة المحتوى لوسائل التواصل الاجتماعي"
        " ومتخصص في الكتابة الإعلانية الإبداعية.",
        "",
        "# السياق الاستراتيجي الشامل (Overall Strategic Context)",
        "هذا هو السياق الكامل لاستراتيجية المحتوى التي أعمل عليها."
        " استخدمه كمرجع أساسي في فهم أهدافي وجمهوري.",
        f'- الهدف الاستراتيجي العام: "{_or(goals.objective if goals else None)}"',
        f'- الجمهور المستهدف الأساسي: "{_or(personas)}"',
        # Brand personality has no compass field yet.
        f'- شخصية العلامة التجارية: "{NOT_SPECIFIED}"',
        f'- نبرة الصوت: "{_or(tone.description if tone else None)}"',
        f'- ✅ كلمات نستخدمها: "{_or(", ".join(tone.dos) if tone else None, NONE_LISTED)}"',
        f'- ❌ كلمات نتجنبها: "{_or(", ".join(tone.donts) if tone else None, NONE_LISTED)}"',
        "",
        "# المهمة (Task)",
        "مهمتك هي تحويل الفكرة الأولية التالية إلى مسودة منشور احترافية وجاهزة للنشر،"
        " مع تخصيصها بشكل دقيق للمنصة المحددة أدناه.",
        "",
        "# تفاصيل المنشور المطلوب (Post Details)",
        "## الفكرة الأولية",
        f'- المحتوى الخام: "{idea_text}"',
        f'- الهدف من هذا المنشور: "{_or(CONTENT_TYPE_LABELS.get(ContentType(content_type)))}"',
        f'- يندرج تحت محور المحتوى: "{_or(pillar.name)}"',
        f'- وصف المحور: "{_or(pillar.description)}"',
        "",
        "## المنصة المستهدفة (Target Platform)",
        f"- المنصة: **{Platform(platform).value}**",
        f'- الهدف من استخدامنا لهذه المنصة: "{_or(strategy.strategic_goal if strategy else None)}"',
        f'- نوع المنشور المطلوب: "{_or(post_type.name if post_type else None)}"',
    ]

    details = _field_lines(platform, post_type_id, post_field_values)
    if details:
        lines.extend(["", "## تفاصيل نوع المنشور", *details])

    lines.extend(["", "# التعليمات والمخرجات المطلوبة (Instructions & Output)"])
    lines.extend(_OUTPUT_INSTRUCTIONS)
    return "\n".join(lines)

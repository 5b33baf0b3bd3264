"""Static registry of post types per platform.

Each platform offers an ordered set of post types; each post type declares
the ordered fields a user fills in. The prompt assembler walks these
descriptors, and channel strategies reference post types by id.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from zawia.models.common import Platform


class FieldKind(StrEnum):
    """Input kind for a post-type field."""

    TEXT = "text"
    TEXTAREA = "textarea"
    OPTIONS = "options"


@dataclass(frozen=True)
class PostField:
    """One input on a post type form."""

    id: str
    label: str
    kind: FieldKind = FieldKind.TEXT
    placeholder: str = ""


@dataclass(frozen=True)
class PostType:
    """A platform-specific post format."""

    id: str
    name: str
    description: str
    fields: tuple[PostField, ...] = field(default_factory=tuple)
    strategic_note: str = ""
    system_reminder: str = ""


_TEXT = PostField("text", "النص", FieldKind.TEXTAREA, "اكتب نص المنشور")
_CAPTION = PostField("caption", "النص المرافق", FieldKind.TEXTAREA, "النص الذي يظهر مع المنشور")
_VISUAL = PostField("visualIdea", "وصف الفكرة المرئية", FieldKind.TEXTAREA, "ماذا سيظهر في الصورة أو الفيديو؟")
_HOOK = PostField("hook", "الجملة الافتتاحية", FieldKind.TEXT, "أول ثانيتين من الفيديو")
_CTA = PostField("cta", "الدعوة لاتخاذ إجراء", FieldKind.TEXT, "مثال: زوروا الرابط في البايو")


PLATFORM_POST_TYPES: dict[Platform, tuple[PostType, ...]] = {
    Platform.INSTAGRAM: (
        PostType(
            id="instagram-image",
            name="صورة",
            description="صورة واحدة مع نص مرافق.",
            fields=(_VISUAL, _CAPTION, _CTA),
        ),
        PostType(
            id="instagram-carousel",
            name="كاروسيل",
            description="مجموعة شرائح يتصفحها المتابع.",
            fields=(
                PostField("slideCount", "عدد الشرائح", FieldKind.TEXT, "من 2 إلى 10"),
                PostField("slides", "محتوى الشرائح", FieldKind.TEXTAREA, "شريحة لكل سطر"),
                _CAPTION,
            ),
            strategic_note="الكاروسيل التعليمي يحقق أعلى نسب حفظ.",
        ),
        PostType(
            id="instagram-reel",
            name="ريلز",
            description="فيديو عمودي قصير.",
            fields=(_HOOK, _VISUAL, _CAPTION),
            system_reminder="اجعل الفكرة واضحة خلال أول ثلاث ثوانٍ.",
        ),
        PostType(
            id="instagram-story",
            name="ستوري",
            description="محتوى مؤقت لمدة 24 ساعة.",
            fields=(_VISUAL, PostField("sticker", "الملصق التفاعلي", FieldKind.OPTIONS, "استطلاع، سؤال، اختبار")),
        ),
    ),
    Platform.X: (
        PostType(
            id="x-tweet",
            name="تغريدة",
            description="منشور نصي قصير.",
            fields=(_TEXT,),
        ),
        PostType(
            id="x-thread",
            name="سلسلة تغريدات",
            description="سلسلة مترابطة من التغريدات.",
            fields=(
                PostField("threadHook", "التغريدة الأولى", FieldKind.TEXTAREA, "ما الذي سيجذب القارئ؟"),
                PostField("threadPoints", "النقاط الرئيسية", FieldKind.TEXTAREA, "نقطة لكل سطر"),
            ),
        ),
        PostType(
            id="x-poll",
            name="استطلاع",
            description="سؤال مع خيارات للتصويت.",
            fields=(
                PostField("question", "السؤال", FieldKind.TEXT, "ما الذي تريد معرفته؟"),
                PostField("options", "الخيارات", FieldKind.OPTIONS, "خيار لكل سطر، حتى 4 خيارات"),
            ),
        ),
    ),
    Platform.FACEBOOK: (
        PostType(
            id="facebook-text",
            name="منشور نصي",
            description="منشور نصي مع رابط اختياري.",
            fields=(_TEXT, PostField("link", "الرابط", FieldKind.TEXT, "https://")),
        ),
        PostType(
            id="facebook-image",
            name="صورة",
            description="صورة مع نص مرافق.",
            fields=(_VISUAL, _CAPTION),
        ),
        PostType(
            id="facebook-video",
            name="فيديو",
            description="فيديو أفقي أو مربع.",
            fields=(_HOOK, _VISUAL, _CAPTION),
        ),
    ),
    Platform.LINKEDIN: (
        PostType(
            id="linkedin-text",
            name="منشور نصي",
            description="منشور مهني نصي.",
            fields=(_TEXT,),
        ),
        PostType(
            id="linkedin-document",
            name="مستند",
            description="ملف PDF يعرض كشرائح.",
            fields=(
                PostField("documentTitle", "عنوان المستند", FieldKind.TEXT, "عنوان يظهر على الغلاف"),
                PostField("slides", "محتوى الصفحات", FieldKind.TEXTAREA, "صفحة لكل سطر"),
                _CAPTION,
            ),
            strategic_note="المستندات تبني الثقة وتبرز الخبرة.",
        ),
        PostType(
            id="linkedin-article",
            name="مقال",
            description="مقال طويل على المنصة.",
            fields=(
                PostField("headline", "العنوان", FieldKind.TEXT, "عنوان المقال"),
                PostField("outline", "المخطط", FieldKind.TEXTAREA, "الأقسام الرئيسية"),
            ),
        ),
    ),
    Platform.THREADS: (
        PostType(
            id="threads-text",
            name="منشور نصي",
            description="منشور نصي حواري.",
            fields=(_TEXT,),
        ),
        PostType(
            id="threads-image",
            name="صورة",
            description="صورة مع تعليق قصير.",
            fields=(_VISUAL, _CAPTION),
        ),
    ),
    Platform.TIKTOK: (
        PostType(
            id="tiktok-video",
            name="فيديو",
            description="فيديو عمودي قصير.",
            fields=(
                _HOOK,
                _VISUAL,
                PostField("sound", "الصوت", FieldKind.TEXT, "صوت رائج أو أصلي"),
                _CAPTION,
            ),
            system_reminder="الجملة الافتتاحية تحدد نجاح الفيديو.",
        ),
        PostType(
            id="tiktok-photo",
            name="عرض صور",
            description="مجموعة صور مع موسيقى.",
            fields=(PostField("slides", "الصور", FieldKind.TEXTAREA, "وصف صورة لكل سطر"), _CAPTION),
        ),
    ),
    Platform.SNAPCHAT: (
        PostType(
            id="snapchat-story",
            name="قصة",
            description="لقطات متتابعة لمدة 24 ساعة.",
            fields=(_VISUAL, PostField("overlayText", "النص على الشاشة", FieldKind.TEXT, "نص قصير")),
        ),
        PostType(
            id="snapchat-spotlight",
            name="سبوتلايت",
            description="فيديو قصير للعرض العام.",
            fields=(_HOOK, _VISUAL),
        ),
    ),
    Platform.EMAIL: (
        PostType(
            id="email-newsletter",
            name="نشرة بريدية",
            description="رسالة دورية للمشتركين.",
            fields=(
                PostField("subject", "عنوان الرسالة", FieldKind.TEXT, "سطر الموضوع"),
                PostField("preheader", "النص التمهيدي", FieldKind.TEXT, "يظهر بعد العنوان"),
                PostField("body", "محتوى الرسالة", FieldKind.TEXTAREA, "النقاط الرئيسية"),
                _CTA,
            ),
        ),
        PostType(
            id="email-announcement",
            name="إعلان",
            description="رسالة إعلان عن منتج أو حدث.",
            fields=(
                PostField("subject", "عنوان الرسالة", FieldKind.TEXT, "سطر الموضوع"),
                PostField("body", "محتوى الرسالة", FieldKind.TEXTAREA, "تفاصيل الإعلان"),
                _CTA,
            ),
        ),
    ),
}


def post_types_for(platform: Platform) -> tuple[PostType, ...]:
    """Return the ordered post types offered on a platform."""
    return PLATFORM_POST_TYPES.get(platform, ())


def get_post_type(platform: Platform, post_type_id: str | None) -> PostType | None:
    """Look up one post type on a platform, or None."""
    if not post_type_id:
        return None
    for post_type in post_types_for(platform):
        if post_type.id == post_type_id:
            return post_type
    return None

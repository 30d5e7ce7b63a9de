"""portal/paper: journal-style container with customer portal cards."""

from __future__ import annotations

import logging

from sceneforge.engine.registry import FieldRange, template
from sceneforge.engine.sampler import LayoutParams
from sceneforge.engine.templates.base import (
    BuildContext,
    PanelFrame,
    SceneDraft,
    background_fill,
    card_rect,
    clamp,
    decor,
    finalize,
    label,
    motif_use,
    panel_rect,
    person_use,
    title_slots,
)
from sceneforge.engine.templates.payments import payments_glass
from sceneforge.models.scene import Scene

logger = logging.getLogger(__name__)

FIELDS = (
    FieldRange("panel_x", 60, 120, valid=(40, 140)),
    FieldRange("panel_y", 150, 200, valid=(140, 210)),
    FieldRange("panel_w", 680, 780, valid=(640, 820)),
    FieldRange("panel_h", 340, 410, valid=(320, 420)),
    FieldRange(
        "person_x",
        lambda d: d["panel_x"] + d["panel_w"] - 130,
        lambda d: d["panel_x"] + d["panel_w"] - 70,
        valid=(640, 880),
    ),
)

PAPER_MOTIFS = ("paper_frame", "pencil_shade_bl", "tape_strip")

SOFT2_FILTER = (
    '      <filter id="f_soft2" x="-30%" y="-30%" width="160%" height="160%">\n'
    '        <feGaussianBlur stdDeviation="24"/>\n'
    "      </filter>\n"
)

INNER_PAD = 22

CARD_W = 300
CARD_H = 112

# (key, dy, icon motif, title, subtitle)
CARDS = (
    ("profile", 50, "lucide_user", "Customer portal", "Order status • receipts • updates"),
    ("order", 180, "lucide_file_text", "Order #1284", "Scheduled • Crew assigned"),
)

# (node id, motif, width, height, dx, dy, opacity)
PROPS = (
    ("phone", "phone_handdrawn", 220, 170, 360, 80, 0.72),
    ("receipt", "receipt_handdrawn", 190, 150, 560, 160, 0.62),
    ("chat", "chat_bubble_handdrawn", 230, 170, 420, 220, 0.56),
)

ICON_POOL = ("lucide_message_circle", "lucide_lock", "lucide_file_text", "lucide_user")
ICON_COUNT = (1, 2)
ICON_SIZE = 28
ICON_STEP = 38
# Row starts right of the tape strip, above the first card
ICON_ROW_DX = 140
ICON_ROW_DY = 14

PERSON_Y = 180


@template(domain="portal", style="paper", fields=FIELDS, default=True,
          description="Paper container with portal cards and hand-drawn props")
def portal_paper(ctx: BuildContext, layout: LayoutParams) -> Scene:
    if not any(ctx.has(m) for m in PAPER_MOTIFS):
        logger.debug("No paper motifs in set, building payments/glass instead")
        return payments_glass(ctx, layout)

    draft = SceneDraft(
        title="Auto: Customer Portal (Paper)",
        desc="Auto-generated customer portal scene with paper/journal container and UI cards.",
        seed=ctx.seed,
        motifs=ctx.motifs,
    )
    draft.defs_raw += SOFT2_FILTER

    frame = PanelFrame(
        x=clamp(layout.panel_x, 40, 140),
        y=clamp(layout.panel_y, 140, 210),
        w=clamp(layout.panel_w, 640, 820),
        h=clamp(layout.panel_h, 320, 420),
        person_x=clamp(layout.person_x, 640, 880),
        pad=INNER_PAD,
    )
    rand = ctx.micro_rand()

    draft.add(
        background_fill(),
        decor("glow", "ellipse", "shadow", cx=340, cy=220, rx=220, ry=180,
              fill="rgba(79,140,255,0.16)", filter="url(#f_soft2)"),
    )
    if ctx.has("paper_frame"):
        draft.add(motif_use("paper", "paper_frame", 0, 0, 1200, 600, 0.82,
                            role="decor", data_decor_type="texture"))
    if ctx.has("pencil_shade_bl"):
        draft.add(motif_use("shade", "pencil_shade_bl", -30, 380, 320, 220, 0.32,
                            role="decor", data_decor_type="shadow"))

    draft.add(panel_rect(frame, rx=22, fill="rgba(255,255,255,0.03)", stroke="rgba(255,255,255,0.10)"))

    for key, dy, icon, title, subtitle in CARDS:
        x = frame.clamp_x(frame.x + 40, CARD_W)
        y = frame.y + dy
        draft.add(card_rect(f"{key}_card", x, y, CARD_W, CARD_H))
        if ctx.has(icon):
            draft.add(motif_use(f"{key}_ico", icon, x + 26, y + 26, 38, 38, 0.95))
        draft.add(
            label(f"{key}_t", x + 80, y + 50, title, "rgba(234,242,255,0.88)", 13, font_weight=700),
            label(f"{key}_s", x + 80, y + 74, subtitle, "rgba(234,242,255,0.58)", 12),
        )

    for node_id, motif_id, w, h, dx, dy, opacity in PROPS:
        if ctx.has(motif_id):
            draft.add(motif_use(node_id, motif_id, frame.clamp_x(frame.x + dx, w), frame.clamp_y(frame.y + dy, h), w, h, opacity))

    if ctx.has("tape_strip"):
        draft.add(motif_use("tape", "tape_strip", frame.x - 14, frame.y - 18, 140, 70, 0.22))

    pool = ctx.available(ICON_POOL)
    count = clamp(rand.randint(*ICON_COUNT), 0, len(pool))
    icons = rand.pick_some_sorted(pool, count)
    for i, (motif_id, x) in enumerate(frame.icon_row(icons, ICON_STEP, start=frame.x + ICON_ROW_DX)):
        draft.add(motif_use(f"tag_{i}", motif_id, x, frame.y + ICON_ROW_DY, ICON_SIZE, ICON_SIZE, 0.7))

    person = ctx.person_motif()
    if person:
        draft.add(person_use(person, frame.person_x, PERSON_Y))

    draft.add(*title_slots())
    return finalize(draft)

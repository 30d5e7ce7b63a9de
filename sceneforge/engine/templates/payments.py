"""payments/glass: glass panel, hand-drawn card/invoice/receipt, trust icon row."""

from __future__ import annotations

from sceneforge.engine.registry import FieldRange, template
from sceneforge.engine.sampler import LayoutParams
from sceneforge.engine.templates.base import (
    BuildContext,
    PanelFrame,
    SceneDraft,
    background_fill,
    clamp,
    decor,
    finalize,
    motif_use,
    panel_rect,
    person_use,
    soft_orb,
    title_slots,
)
from sceneforge.models.scene import Scene

FIELDS = (
    FieldRange("panel_x", 70, 120, valid=(50, 160)),
    FieldRange("panel_y", 168, 210, valid=(150, 240)),
    FieldRange("panel_w", 740, 820, valid=(680, 860)),
    FieldRange("panel_h", 316, 368, valid=(300, 380)),
    FieldRange(
        "person_x",
        lambda d: d["panel_x"] + d["panel_w"] - 130,
        lambda d: d["panel_x"] + d["panel_w"] - 70,
        valid=(620, 880),
    ),
    # Recorded with the winner; props stay on their fixed anchors
    FieldRange("card_x", 30, 90),
    FieldRange("card_y", 28, 72),
    FieldRange("receipt_x", 300, 480),
    FieldRange("receipt_y", 96, 176),
    FieldRange("invoice_x", 460, 600),
    FieldRange("invoice_y", 44, 124),
)

INNER_PAD = 26

# (node id, motif, width, height, dx, dy, opacity); offsets from the panel's top-left
PROPS = (
    ("card", "credit_card_handdrawn", 330, 230, INNER_PAD, 64, 0.76),
    ("invoice", "invoice_handdrawn", 220, 170, INNER_PAD + 380, 72, 0.46),
    ("receipt", "receipt_handdrawn", 230, 176, INNER_PAD + 160, 214, 0.58),
)

ICON_POOL = (
    "lucide_shield_check",
    "lucide_lock",
    "lucide_wallet",
    "lucide_credit_card",
    "lucide_badge_check",
    "lucide_coins",
)
ICON_COUNT = (2, 3)
ICON_SIZE = 34
ICON_STEP = 44

PERSON_Y = 172


@template(domain="payments", style="glass", fields=FIELDS, default=True,
          description="Glass container with real-world payment props")
def payments_glass(ctx: BuildContext, layout: LayoutParams) -> Scene:
    draft = SceneDraft(
        title="Auto: Payments (Glass)",
        desc="Auto-generated payments scene with glass container and real-world payment props.",
        seed=ctx.seed,
        motifs=ctx.motifs,
    )
    frame = PanelFrame(
        x=clamp(layout.panel_x, 50, 160),
        y=clamp(layout.panel_y, 150, 240),
        w=clamp(layout.panel_w, 680, 860),
        h=clamp(layout.panel_h, 300, 380),
        person_x=clamp(layout.person_x, 620, 880),
        pad=INNER_PAD,
    )
    rand = ctx.micro_rand()

    draft.add(
        background_fill(),
        soft_orb("orb1", frame.x + 210, frame.y + 8, 170, "rgba(79,140,255,0.16)"),
        soft_orb("orb2", 980, 420, 190, "rgba(139,91,255,0.14)"),
        decor(
            "panel_shadow", "ellipse", "shadow",
            cx=frame.x + frame.w / 2 + 40, cy=frame.y + frame.h + 100, rx=520, ry=120,
            fill="rgba(0,0,0,0.28)", filter="url(#f_soft)",
        ),
        panel_rect(frame, rx=26, fill="rgba(255,255,255,0.04)", stroke="rgba(255,255,255,0.12)"),
    )

    for node_id, motif_id, w, h, dx, dy, opacity in PROPS:
        if not ctx.has(motif_id):
            continue
        x = frame.clamp_x(frame.x + dx, w)
        y = frame.clamp_y(frame.y + dy, h)
        draft.add(motif_use(node_id, motif_id, x, y, w, h, opacity))

    pool = ctx.available(ICON_POOL)
    count = clamp(rand.randint(*ICON_COUNT), 0, len(pool))
    icons = rand.pick_some_sorted(pool, count)
    row_y = frame.clamp_y(frame.y + 44, ICON_SIZE)
    for i, (motif_id, x) in enumerate(frame.icon_row(icons, ICON_STEP)):
        draft.add(motif_use(f"tag_{i}", motif_id, x, row_y, ICON_SIZE, ICON_SIZE, 0.82))

    person = ctx.person_motif()
    if person:
        draft.add(person_use(person, frame.person_x, PERSON_Y))

    draft.add(*title_slots())
    return finalize(draft)

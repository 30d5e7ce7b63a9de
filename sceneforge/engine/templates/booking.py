"""booking/glass: glass panel with a 2x2 grid of scheduling chips.

Also the generic fallback for domains with no template of their own.
"""

from __future__ import annotations

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
    soft_orb,
    title_slots,
)
from sceneforge.models.scene import Scene

FIELDS = (
    FieldRange("panel_x", 60, 120, valid=(50, 160)),
    FieldRange("panel_y", 158, 210, valid=(150, 240)),
    FieldRange("panel_w", 720, 820, valid=(680, 860)),
    FieldRange("panel_h", 320, 372, valid=(300, 380)),
    FieldRange(
        "person_x",
        lambda d: d["panel_x"] + d["panel_w"] - 130,
        lambda d: d["panel_x"] + d["panel_w"] - 70,
        valid=(640, 880),
    ),
)

INNER_PAD = 26

# (key, column, row, preferred width, icon motif, title, subtitle)
CHIPS = (
    ("slot", 0, 0, 320, "lucide_calendar_clock", "Time slots", "Capacity-aware availability"),
    ("dur", 1, 0, 340, "lucide_timer", "Duration", "Per-service time blocks"),
    ("area", 0, 1, 320, "lucide_map", "Service area", "Zones + coverage rules"),
    ("skill", 1, 1, 340, "lucide_badge", "Skill match", "Right tech, first time"),
)
CHIP_H = 84
CHIP_DX = 40
CHIP_DY = 50
CHIP_ROW_STEP = 102
CHIP_GAP = 20

ICON_POOL = ("lucide_calendar_clock", "lucide_timer", "lucide_map", "lucide_badge")
ICON_COUNT = (2, 3)
ICON_SIZE = 30
ICON_STEP = 40
ICON_ROW_DY = 256

PERSON_Y = 168


def chip_columns(frame: PanelFrame) -> tuple[list[float], float]:
    """Left edges of the two chip columns and the width each may use."""
    left = frame.x + CHIP_DX
    col_w = max(0, (frame.safe_right - left - CHIP_GAP) // 2)
    first = min(320, col_w)
    return [left, left + first + CHIP_GAP], col_w


@template(domain="booking", style="glass", fields=FIELDS, default=True,
          description="Glass container with scheduling chips")
def booking_glass(ctx: BuildContext, layout: LayoutParams) -> Scene:
    draft = SceneDraft(
        title="Auto: Booking (Glass)",
        desc="Auto-generated booking scene with glass container and scheduling icons.",
        seed=ctx.seed,
        motifs=ctx.motifs,
    )
    frame = PanelFrame(
        x=clamp(layout.panel_x, 50, 160),
        y=clamp(layout.panel_y, 150, 240),
        w=clamp(layout.panel_w, 680, 860),
        h=clamp(layout.panel_h, 300, 380),
        person_x=clamp(layout.person_x, 640, 880),
        pad=INNER_PAD,
    )
    rand = ctx.micro_rand()

    draft.add(
        background_fill(),
        soft_orb("orb1", frame.x + 180, frame.y - 10, 160, "rgba(79,140,255,0.16)"),
        soft_orb("orb2", 980, 420, 180, "rgba(139,91,255,0.14)"),
        decor(
            "panel_shadow", "ellipse", "shadow",
            cx=frame.x + frame.w / 2 + 20, cy=frame.y + frame.h + 98, rx=520, ry=120,
            fill="rgba(0,0,0,0.28)", filter="url(#f_soft)",
        ),
        panel_rect(frame, rx=26, fill="rgba(255,255,255,0.04)", stroke="rgba(255,255,255,0.12)"),
    )

    columns, col_w = chip_columns(frame)
    for key, col, row, width, icon, title, subtitle in CHIPS:
        x = columns[col]
        y = frame.y + CHIP_DY + row * CHIP_ROW_STEP
        draft.add(card_rect(f"chip_{key}", x, y, min(width, col_w), CHIP_H))
        if ctx.has(icon):
            draft.add(motif_use(f"i_{key}", icon, x + 26, y + 22, 34, 34, 0.95))
        draft.add(
            label(f"t_{key}", x + 76, y + 36, title, "rgba(234,242,255,0.88)", 13, font_weight=720),
            label(f"s_{key}", x + 76, y + 58, subtitle, "rgba(234,242,255,0.56)", 12),
        )

    pool = ctx.available(ICON_POOL)
    count = clamp(rand.randint(*ICON_COUNT), 0, len(pool))
    icons = rand.pick_some_sorted(pool, count)
    row_y = frame.clamp_y(frame.y + ICON_ROW_DY, ICON_SIZE)
    for i, (motif_id, x) in enumerate(frame.icon_row(icons, ICON_STEP, start=frame.x + CHIP_DX)):
        draft.add(motif_use(f"tag_{i}", motif_id, x, row_y, ICON_SIZE, ICON_SIZE, 0.7))

    person = ctx.person_motif()
    if person:
        draft.add(person_use(person, frame.person_x, PERSON_Y))

    draft.add(*title_slots())
    return finalize(draft)

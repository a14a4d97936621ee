# panelsched/engine/frame.py
"""
Fixed furniture of a schedule: header, grid, footer, centre bus,
notes and calculation boxes, border.

Tables below hold offsets from either the panel origin (top-left) or the
end point (bottom-right of the circuit area). Text rows are
(content, dx, dy, style, height, width_factor, color).
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from panelsched.schemas.layout import LayoutTable
from panelsched.schemas.panel import PanelDescriptor
from panelsched.schemas.primitives import (
    BYBLOCK,
    BYLAYER,
    Circle,
    LineSegment,
    Point,
    Polyline,
    Primitive,
    TextLabel,
)

logger = logging.getLogger(__name__)

TextRow = Tuple[str, float, float, str, float, float, int]
LineRow = Tuple[float, float, float, float]

VALUE_LAYER = "PNLTXT"
BORDER_WIDTH = 0.02

# -- header -------------------------------------------------------------------
HEADER_LABELS: List[TextRow] = [
    ("PANEL", 0.231944251649111, -0.299822699224023, "ROMANC", 0.1872, 0.75, BYBLOCK),
    ("DESCRIPTION", 0.305517965881791, -0.638118222684739, "Standard", 0.1248, 0.75, BYLAYER),
    ("W", 8.64365164909793, -0.155688865359394, "Standard", 0.101088, 0.75, BYBLOCK),
    ("VOLT AMPS", 1.9015733562577, -0.532524377875689, "Standard", 0.11232, 0.75, BYLAYER),
    ("L", 2.97993751651882, -0.483601235896458, "Standard", 0.07488, 0.75, BYLAYER),
    ("T", 2.97993751651882, -0.59526740969153, "Standard", 0.07488, 0.75, BYLAYER),
    ("G", 2.97993751651882, -0.702157646684782, "Standard", 0.07488, 0.75, BYLAYER),
    ("R", 3.20889406685785, -0.482921120531671, "Standard", 0.07488, 0.75, BYLAYER),
    ("E", 3.20889406685785, -0.594587294326715, "Standard", 0.07488, 0.75, BYLAYER),
    ("C", 3.20889406685785, -0.701477531319966, "Standard", 0.07488, 0.75, BYLAYER),
    ("M", 3.43493724520761, -0.482921120531671, "Standard", 0.07488, 0.75, BYLAYER),
    ("I", 3.4427934214732, -0.594587294326715, "Standard", 0.07488, 0.75, BYLAYER),
    ("S", 3.43493724520761, -0.701477531319966, "Standard", 0.07488, 0.75, BYLAYER),
    ("BKR", 3.63691080609988, -0.61662650707666, "Standard", 0.09152, 0.75, BYLAYER),
    ("CKT", 3.94429929014041, -0.529332995532684, "Standard", 0.0832, 0.75, BYLAYER),
    (" NO", 3.90688892697108, -0.673306258645766, "Standard", 0.0832, 0.75, BYLAYER),
    ("BUS", 4.32282163085404, -0.527068325709052, "Standard", 0.11232, 0.75, BYLAYER),
    ("CKT", 4.88897460099258, -0.535275052777223, "Standard", 0.07488, 0.75, BYLAYER),
    (" NO", 4.85530527414039, -0.664850989579008, "Standard", 0.07488, 0.75, BYLAYER),
    ("BKR", 5.14497871612878, -0.612478980835647, "Standard", 0.082368, 0.75, BYLAYER),
    ("M", 5.4736003885796, -0.483601235896458, "Standard", 0.07488, 0.75, BYLAYER),
    ("I", 5.48257887574016, -0.59526740969153, "Standard", 0.07488, 0.75, BYLAYER),
    ("S", 5.4736003885796, -0.702157646684782, "Standard", 0.07488, 0.75, BYLAYER),
    ("R", 5.70588736710022, -0.482921120531671, "Standard", 0.07488, 0.75, BYLAYER),
    ("E", 5.70588736710022, -0.594587294326715, "Standard", 0.07488, 0.75, BYLAYER),
    ("C", 5.70588736710022, -0.701477531319966, "Standard", 0.07488, 0.75, BYLAYER),
    ("L", 5.93367350805136, -0.484281352862808, "Standard", 0.07488, 0.75, BYLAYER),
    ("T", 5.93367350805136, -0.595947526657881, "Standard", 0.07488, 0.75, BYLAYER),
    ("G", 5.93367350805136, -0.702837763651132, "Standard", 0.07488, 0.75, BYLAYER),
    ("VOLT AMPS", 6.32453930091015, -0.532297673821773, "Standard", 0.11232, 0.75, BYLAYER),
    ("DESCRIPTION", 7.68034755863846, -0.636791573573134, "Standard", 0.1248, 0.75, BYLAYER),
    ("LOCATION", 2.32067207718262, -0.155059196495415, "Standard", 0.11232, 0.75, BYBLOCK),
    ("MAIN (AMP)", 2.32089885857886, -0.338479316609039, "Standard", 0.11232, 0.75, BYBLOCK),
    ("BUS RATING", 5.18507633525223, -0.271963067880222, "Standard", 0.1248, 0.75, BYBLOCK),
    ("MOUNTING:", 7.01560982102967, -0.329154148660905, "Standard", 0.11232, 0.75, BYBLOCK),
    ("V", 7.80112268015148, -0.158231303238949, "Standard", 0.09984, 0.75, BYBLOCK),
    ("O", 8.30325740318381, -0.151432601608803, "Standard", 0.101088, 0.75, BYBLOCK),
]

PHASE_HEADINGS_3P: List[TextRow] = [
    ("OA", 1.75923320841673, -0.715823582939777, "Standard", 0.11232, 0.75, BYLAYER),
    ("OB", 2.17200390182074, -0.714690056264089, "Standard", 0.11232, 0.75, BYLAYER),
    ("OC", 2.57149885762158, -0.718725420176355, "Standard", 0.11232, 0.75, BYLAYER),
    ("OA", 4.22229040316483, -0.714236644953189, "Standard", 0.11232, 0.75, BYLAYER),
    ("OB", 4.42655098606872, -0.714236644953189, "Standard", 0.11232, 0.75, BYLAYER),
    ("OC", 4.63417850165774, -0.713042660752734, "Standard", 0.11232, 0.75, BYLAYER),
    ("OA", 6.22324655852697, -0.71537017323044, "Standard", 0.11232, 0.75, BYLAYER),
    ("OB", 6.63397621936463, -0.714690057865624, "Standard", 0.11232, 0.75, BYLAYER),
    ("OC", 7.03324439586629, -0.718272010467018, "Standard", 0.11232, 0.75, BYLAYER),
]

PHASE_HEADINGS_2P: List[TextRow] = [
    ("OA", 1.87939466183889, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
    ("OB", 2.50641160863188, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
    ("OA", 4.19245469916268, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
    ("OB", 4.59766144739842, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
    ("OA", 6.2528343633212, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
    ("OB", 6.91903366501083, -0.720370467604425, "Standard", 0.1248, 0.75, BYLAYER),
]

# (attribute, dx, dy, style, height) of the header values
HEADER_VALUES = [
    ("name", 1.17828457810867, -0.299822699224023, "ROMANC", 0.1872, 0.75),
    ("location", 3.19605976175148, -0.137807184107345, "ROMANS", 0.09375, 1.0),
    ("main", 3.24033367283675, -0.32590837886957, "ROMANS", 0.09375, 1.0),
    ("bus_rating", 6.2073642121926, -0.274622599308543, "ROMANS", 0.12375, 1.0),
    ("voltage", 7.04393671550224, -0.141653203021775, "ROMANS", 0.09375, 1.0),
    ("mounting", 7.87802551675406, -0.331292901876935, "ROMANS", 0.09375, 1.0),
    ("phase", 8.1253996026328, -0.141653203021775, "ROMANS", 0.09375, 1.0),
    ("wire", 8.50104048135836, -0.141653203021775, "ROMANS", 0.09375, 1.0),
]

# -- grid -----------------------------------------------------------------------
HEADER_ROW = 0.3744

# (left1, left2, left3, right1, right2, right3); None where the variant has no rule
GRID_COLUMNS_3P = (1.6224, 2.0488, 2.4752, 6.5104, 6.9368, 7.3632)
GRID_COLUMNS_2P = (1.7549, 2.3023, None, 6.7259, None, 7.3632)

TOP_RULES = (2.2222, 5.0666, 6.9368)
BODY_RULES = (2.9016, 3.1304, 3.3592, 3.5880, 3.9000, 4.1496, 4.8360, 5.0856, 5.3976, 5.6264, 5.8552, 6.0840)

# phase heading slashes, origin-relative (x1, y1, x2, y2)
HEADING_SLASHES_3P: List[LineRow] = [
    (1.8219640114711, -0.587355127494504, 1.75209866364992, -0.732578250164607),
    (2.2392415498706, -0.587355127494504, 2.16937620204942, -0.732578250164607),
    (2.64064439053459, -0.587355127494504, 2.57077904271353, -0.732578250164607),
    (4.28558110707343, -0.581743684459752, 4.21812491713047, -0.728299423953047),
    (4.4919520727949, -0.581743684459752, 4.42449588285183, -0.728299423953047),
    (4.69832301754843, -0.581743684459752, 4.63086682760547, -0.728299423953047),
    (6.28764850398056, -0.586040159740406, 6.21478297900239, -0.730701330926394),
    (6.69812260049363, -0.586040159740406, 6.62525707551547, -0.730701330926394),
    (7.10859666269549, -0.586040159740406, 7.03573113771732, -0.730701330926394),
]

HEADING_SLASHES_2P: List[LineRow] = [
    (1.85445441972615, -0.728330362273937, 1.96793252133921, -0.595665451113291),
    (2.48147136651869, -0.728330362273937, 2.5949494681322, -0.595665451113291),
    (4.16751445704995, -0.728330362273937, 4.280992558663, -0.595665451113291),
    (4.57272120528569, -0.728330362273937, 4.68619930689874, -0.595665451113291),
    (6.22789412120846, -0.728330362273937, 6.34137222282197, -0.595665451113291),
    (6.8940934228981, -0.728330362273937, 7.0075715245116, -0.595665451113291),
]

VOLTAGE_SLASH: LineRow = (8.28490642235897, -0.153581773169606, 8.37682368466574, -0.0461231951291552)

# -- footer (end-point relative) -------------------------------------------------
FOOTER_LABELS_3P: List[TextRow] = [
    ("SUB-TOTAL", -8.91077927366155, 0.0689855381989162, "Standard", 0.1248, 1.0, 7),
    ("OA", -6.45042438923338, 0.0742921346453898, "Standard", 0.1248, 0.75, 7),
    ("OB", -4.60529448980549, 0.0742921346453898, "Standard", 0.1248, 0.75, 7),
    ("OC", -2.04216838194191, 0.0742921346453898, "Standard", 0.1248, 0.75, 7),
    ("=", -6.24591440390827, 0.0742921346453898, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -4.40078450448038, 0.0742921346453898, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -1.8376583966168, 0.0742921346453898, "Standard", 0.1248, 0.75, BYLAYER),
]
FOOTER_VALUES_3P = [
    ("subtotal_a", -6.07732066030258, 0.0948263267698053),
    ("subtotal_b", -4.23219076087469, 0.0948263267698053),
    ("subtotal_c", -1.66906465301099, 0.0948263267698053),
]

FOOTER_LABELS_2P: List[TextRow] = [
    ("SUB-TOTAL", -8.91077927366177, 0.0697891578365528, "Standard", 0.1248, 0.75, BYLAYER),
    ("OA", -6.45042438923338, 0.0920885745242259, "Standard", 0.1248, 0.75, BYLAYER),
    ("OB", -4.51630861338526, 0.0818929993556878, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -6.24591440390805, 0.0920885745242259, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -4.32551576122205, 0.0818929993556878, "Standard", 0.1248, 0.75, BYLAYER),
]
FOOTER_VALUES_2P = [
    ("subtotal_a", -6.08199405082502, 0.108280531454625),
    ("subtotal_b", -4.15962890179264, 0.0980849562860868),
]

# -- centre bus ----------------------------------------------------------------
CENTER_SLASHES_3P: List[LineRow] = [
    (-6.47536463134611, 0.0663322399757078, -6.36188652973283, 0.198997151136808),
    (-4.63023473191822, 0.0663322399757078, -4.51675663030494, 0.198997151136808),
    (-2.06710862405464, 0.0663322399757078, -1.95363052244136, 0.198997151136808),
]
CENTER_SLASHES_2P: List[LineRow] = [
    (-6.47536463134611, 0.0841286798547145, -6.3618865297326, 0.216793591015815),
    (-4.541248855498, 0.0739331046861764, -4.42777075388449, 0.206598015847277),
]
# (end-relative x offsets, bottom y offset above the end point)
CENTER_BUS_3P = ((-4.30559999999991, -4.49279999999999, -4.67999999999984), 0.253292187434056)
CENTER_BUS_2P = ((-4.67999999999984, -4.30668381424084), 0.277148912917994)

CENTER_DOT_RADIUS = 0.0312
CENTER_DOT_FIRST_Y = 0.8424
CENTER_RUNG_X = (4.22905693965708, 4.75654306034312)
CENTER_DOT_X = 4.3056
CENTER_DOT_STEP_3P = 0.1872
CENTER_DOT_STEP_2P = 0.3733

# -- notes & calculations (end-point relative) ------------------------------------
STATUS_TITLES = {
    "new": "(NEW PANEL)",
    "existing": "(EXISTING PANEL)",
    "relocated": "(EXISTING TO BE RELOCATED PANEL)",
}
STATUS_TITLE_AT = (0.236635303895696, 0.113254677317428)
NOTE_LINES = {
    "new": ["65 KAIC SERIES RATED OR MATCH FAULT CURRENT AT SITE."],
    "existing": ["DENOTES EXISTING CIRCUIT BREAKER TO REMAIN; ALL OTHERS ARE NEW", "TO MATCH EXISTING."],
}
NOTE_LINES["relocated"] = NOTE_LINES["existing"]
NOTE_LINE_Y = (-0.405747901076808, -0.610352149436778)
NOTE_TEXT_X = -5.61904201783966

BOX_TOP = -0.0846396524177919
BOX_BOTTOM = -1.02063965241777
BOX_RULES = (-0.27183965241781, -0.459039652417772, -0.64623965241779, -0.833439652417809)
NOTES_BOX_X = (0.0, -6.07359999999994)
CALC_BOX_X = (-6.17759999999998, -8.98559999999998)

CALC_LABELS: List[TextRow] = [
    ("TOTAL CONNECTED VA", -8.93821353998555, -0.244065644556514, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -7.03028501835593, -0.242614932747216, "Standard", 0.1248, 0.75, BYLAYER),
    ("LCL @ 125 %          ", -8.91077927366155, -0.432165907882307, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -7.03028501835593, -0.437756414851634, "Standard", 0.1248, 0.75, BYLAYER),
    ("TOTAL OTHER LOAD", -8.9456956126196, -0.616854044919108, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -7.03028501835593, -0.618180694030713, "Standard", 0.1248, 0.75, BYLAYER),
    ("PANEL LOAD", -8.92075537050664, -0.804954308244959, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -7.03028501835593, -0.809218166102625, "Standard", 0.1248, 0.75, BYLAYER),
    ("FEEDER AMPS", -8.9120262857673, -0.994381220682413, "Standard", 0.1248, 0.75, BYLAYER),
    ("=", -7.03028501835593, -0.998928989062989, "Standard", 0.1248, 0.75, BYLAYER),
]
CALC_VALUE_X = -6.69695957617801
CALC_LCL_FACTOR_X = -7.59414061117746


# -- helpers ------------------------------------------------------------------
def _rows(base: Point, rows: Iterable[TextRow], layer: str = "0") -> List[Primitive]:
    return [
        TextLabel(
            content=content,
            anchor=(base[0] + dx, base[1] + dy),
            style=style,
            height=height,
            width_factor=width,
            color=color,
            layer=layer,
        )
        for content, dx, dy, style, height, width, color in rows
    ]


def _lines(base: Point, rows: Iterable[LineRow], layer: str = "0") -> List[Primitive]:
    return [
        LineSegment(start=(base[0] + x1, base[1] + y1), end=(base[0] + x2, base[1] + y2), layer=layer)
        for x1, y1, x2, y2 in rows
    ]


def _line(x1: float, y1: float, x2: float, y2: float, layer: str = "0") -> LineSegment:
    return LineSegment(start=(x1, y1), end=(x2, y2), layer=layer)


def _value(content: str, at: Point, layout: LayoutTable, justify: str = "left", layer: str = "0") -> TextLabel:
    x, y = at
    if justify == "right":
        x += layout.right_shift
    elif justify == "center":
        x += layout.center_shift
    return TextLabel(
        content=content,
        anchor=(x, y),
        style=layout.text_style,
        height=layout.text_height,
        color=layout.label_color,
        layer=layer,
        justify=justify,
    )


# -- sections -----------------------------------------------------------------
def header_labels(origin: Point, layout: LayoutTable) -> List[Primitive]:
    headings = PHASE_HEADINGS_3P if layout.phase_count == 3 else PHASE_HEADINGS_2P
    return _rows(origin, HEADER_LABELS) + _rows(origin, headings)


def header_values(panel: PanelDescriptor, origin: Point, layout: LayoutTable) -> List[Primitive]:
    out: List[Primitive] = []
    for attr, dx, dy, style, height, width in HEADER_VALUES:
        out.append(
            TextLabel(
                content=str(getattr(panel, attr)),
                anchor=(origin[0] + dx, origin[1] + dy),
                style=style,
                height=height,
                width_factor=width,
                color=layout.label_color,
                layer=layout.layer,
            )
        )
    return out


def grid_lines(origin: Point, end_point: Point, end_of_data_y: float, layout: LayoutTable) -> List[Primitive]:
    ox, oy = origin
    cols = GRID_COLUMNS_3P if layout.phase_count == 3 else GRID_COLUMNS_2P
    left1, left2, left3, right1, right2, right3 = cols
    slashes = HEADING_SLASHES_3P if layout.phase_count == 3 else HEADING_SLASHES_2P

    out: List[Primitive] = _lines(origin, slashes)

    for dx in TOP_RULES:
        out.append(_line(ox + dx, oy, ox + dx, oy - HEADER_ROW))
    for dx in (left1,) + BODY_RULES + (right3,):
        out.append(_line(ox + dx, oy - HEADER_ROW, ox + dx, end_of_data_y))
    phase_top = oy - HEADER_ROW - HEADER_ROW / 2
    for dx in (left2, left3, right1, right2):
        if dx is not None:
            out.append(_line(ox + dx, phase_top, ox + dx, end_of_data_y))

    half = HEADER_ROW / 2
    ex = end_point[0]
    out.extend([
        _line(ox, oy - HEADER_ROW, ex, oy - HEADER_ROW),
        _line(ox, oy - layout.header_height, ex, oy - layout.header_height),
        _line(ox + 2.2222, oy - half, ox + 5.0666, oy - half),
        _line(ox + 6.9368, oy - half, ex, oy - half),
        _line(ox + left1, phase_top, ox + 2.9016, phase_top),
        _line(ox + 6.0840, phase_top, ox + 7.3632, phase_top),
        _line(ox + 4.1496, phase_top, ox + 4.8360, phase_top),
    ])
    out.extend(_lines(origin, [VOLTAGE_SLASH]))
    return out


def footer(panel: PanelDescriptor, end_point: Point, layout: LayoutTable) -> List[Primitive]:
    if layout.phase_count == 3:
        labels, values = FOOTER_LABELS_3P, FOOTER_VALUES_3P
    else:
        labels, values = FOOTER_LABELS_2P, FOOTER_VALUES_2P
    out = _rows(end_point, labels)
    for attr, dx, dy in values:
        out.append(_value(f"{getattr(panel, attr)}VA", (end_point[0] + dx, end_point[1] + dy), layout))
    return out


def center_lines(origin: Point, end_point: Point, layout: LayoutTable) -> List[Primitive]:
    ex, ey = end_point
    bus_top = origin[1] - layout.header_height
    out: List[Primitive] = [_line(origin[0], ey + layout.footer_gap, ex, ey + layout.footer_gap)]
    if layout.phase_count == 3:
        slashes, (bus_x, bus_lift) = CENTER_SLASHES_3P, CENTER_BUS_3P
    else:
        slashes, (bus_x, bus_lift) = CENTER_SLASHES_2P, CENTER_BUS_2P
    out.extend(_lines(end_point, slashes))
    for dx in bus_x:
        out.append(_line(ex + dx, ey + bus_lift, ex + dx, bus_top))
    out.extend(center_pattern(origin, end_point, layout))
    return out


def center_pattern(origin: Point, end_point: Point, layout: LayoutTable) -> List[Primitive]:
    """Filled bus dots stepping across the phase bars, one rung per physical row."""
    three = layout.phase_count == 3
    per_cycle = 3 if three else 2
    step_x = CENTER_DOT_STEP_3P if three else CENTER_DOT_STEP_2P
    min_y = end_point[1] + layout.footer_gap
    y = origin[1] - CENTER_DOT_FIRST_Y

    out: List[Primitive] = []
    n = 0
    while y >= min_y:
        x = origin[0] + CENTER_DOT_X + step_x * (n % per_cycle)
        out.append(Circle(center=(x, y), radius=CENTER_DOT_RADIUS, color=7, layer=layout.layer, filled=True))
        out.append(_line(origin[0] + CENTER_RUNG_X[0], y, origin[0] + CENTER_RUNG_X[1], y))
        y -= layout.row_height
        n += 1
    return out


def notes(panel: PanelDescriptor, origin: Point, end_point: Point, layout: LayoutTable) -> List[Primitive]:
    ex, ey = end_point
    out: List[Primitive] = [
        TextLabel(
            content=STATUS_TITLES[panel.status],
            anchor=(origin[0] + STATUS_TITLE_AT[0], origin[1] + STATUS_TITLE_AT[1]),
            style="ROMANC",
            height=0.1498,
            width_factor=0.75,
            color=layout.label_color,
        ),
        TextLabel(
            content="NOTES:",
            anchor=(ex - 5.96783070435049, ey - 0.23875904811004),
            style="Standard",
            height=0.1248,
            width_factor=0.75,
            color=BYLAYER,
        ),
    ]
    for text, dy in zip(NOTE_LINES[panel.status], NOTE_LINE_Y):
        out.append(_value(text, (ex + NOTE_TEXT_X, ey + dy), layout))

    out.extend(_box(end_point, NOTES_BOX_X))

    # legend for the keeper marker
    out.append(Circle(center=(ex - 5.8088, ey - 0.3664), radius=layout.keeper.marker_radius, color=2))
    out.append(_value("1", (ex - 5.85897687070053 - 0.145, ey - 0.410151417346867), layout, justify="center"))
    return out


def _box(end_point: Point, xs: Tuple[float, float]) -> List[Primitive]:
    ex, ey = end_point
    x1, x2 = ex + xs[0], ex + xs[1]
    out: List[Primitive] = [
        _line(x1, ey + BOX_TOP, x2, ey + BOX_TOP),
        _line(x1, ey + BOX_TOP, x1, ey + BOX_BOTTOM),
        _line(x2, ey + BOX_BOTTOM, x2, ey + BOX_TOP),
        _line(x1, ey + BOX_BOTTOM, x2, ey + BOX_BOTTOM),
    ]
    out.extend(_line(x1, ey + dy, x2, ey + dy) for dy in BOX_RULES)
    return out


def _formatted(value: Optional[float], unit: str, label: str, panel: PanelDescriptor) -> Optional[str]:
    if value is None:
        logger.warning(f"Panel {panel.name}: no usable {label} value; leaving it off the calculations box.")
        return None
    return f"{value:.1f} {unit}"


def calculations(panel: PanelDescriptor, end_point: Point, layout: LayoutTable) -> List[Primitive]:
    ex, ey = end_point
    out: List[Primitive] = []
    right = dict(layout=layout, justify="right", layer=VALUE_LAYER)

    kva = _formatted(panel.kva, "KVA", "KVA", panel)
    if kva:
        out.append(_value(kva, (ex + CALC_VALUE_X, ey - 0.785594790702817), **right))
    amps = _formatted(panel.feeder_amps, "A", "feeder amps", panel)
    if amps:
        out.append(_value(amps, (ex + CALC_VALUE_X, ey - 0.970762733814496), **right))

    out.extend(_box(end_point, CALC_BOX_X))
    out.extend(_rows(end_point, CALC_LABELS))
    out.extend([
        _value(panel.total_va, (ex + CALC_VALUE_X, ey - 0.222040136230106), **right),
        _value("0", (ex + CALC_LCL_FACTOR_X, ey - 0.413648726513742), **right),
        _value(panel.lcl, (ex + CALC_VALUE_X, ey - 0.413648726513742), **right),
        _value(panel.total_other_load, (ex + CALC_VALUE_X, ey - 0.597206513223341), **right),
    ])
    return out


def border(origin: Point, end_point: Point, layout: LayoutTable) -> Polyline:
    (ox, oy), (ex, ey) = origin, end_point
    return Polyline(points=[(ox, oy), (ox, ey), (ex, ey), (ex, oy)], closed=True, width=BORDER_WIDTH, layer=layout.layer)


def frame_sections(
    panel: PanelDescriptor,
    origin: Point,
    end_point: Point,
    end_of_data_y: float,
    layout: LayoutTable,
) -> Sequence[List[Primitive]]:
    """Everything drawn after the circuit rows, in drawing order."""
    return (
        grid_lines(origin, end_point, end_of_data_y, layout),
        footer(panel, end_point, layout),
        center_lines(origin, end_point, layout),
        notes(panel, origin, end_point, layout),
        calculations(panel, end_point, layout),
        [border(origin, end_point, layout)],
    )

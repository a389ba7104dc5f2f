"""Catalogue of skeletal landmarks traced on lateral cephalograms.

Every definition is built once at import time and shared by reference: the
point ``N`` used by ``SNA`` is the very same object used by ``SNB`` and
``ANB``.  :data:`REGISTRY` indexes the catalogue by symbol.
"""

from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .geometry import (
    GeoAngle,
    GeoVector,
    calculate_angle,
    create_vector_from_points,
    get_vector_points,
    is_behind,
    radians_to_degrees,
)
from .interpretation import (
    LandmarkInterpretation,
    compose_interpretation,
    default_interpret_landmark,
)
from .landmarks import (
    CalculationInput,
    Landmark,
    angle_between_lines,
    angle_between_points,
    angular_sum,
    distance,
    flip_vector,
    line,
    point,
)

# Points

Ba = point("Ba", "Basion", "Most anterior point on foramen magnum")
Po = point("Po", "Porion", "Most superior point of outline of external auditory meatus")
Or = point("Or", "Orbitale", "Most inferior point on margin of orbit")
S = point("S", "Sella", "Midpoint of sella turcica")
N = point("N", "Nasion", "Most anterior point on frontonasal suture")
A = point("A", "Subspinale", "Most concave point of anterior maxilla")
B = point("B", "Supramentale", "Most concave point on mandibular symphysis")
Pog = point("Pog", "Pogonion", "Most anterior point of mandibular symphysis")
Gn = point(
    "Gn",
    "Gnathion",
    "Point on the mandibular symphysis midway between pogonion and menton",
)
Ar = point(
    "Ar",
    "Articulare",
    "Junction between inferior surface of the cranial base "
    "and the posterior border of the ascending rami of the mandible",
)
Go = point("Go", "Gonion", "Most posterior inferior point on angle of mandible")
Me = point("Me", "Menton", "Lowest point on mandibular symphysis")
ANS = point("ANS", "Anterior nasal spine", "Anterior point on maxillary bone")
PNS = point("PNS", "Posterior nasal spine", "Posterior limit of bony palate or maxilla")
U1_APEX = point("U1 Apex", None, "Apex of upper incisor")
U1_INCISAL_EDGE = point("U1 Incisal Edge", None, "Incisal edge of upper incisor")
L1_APEX = point("L1 Apex", None, "Apex of lower incisor")
L1_INCISAL_EDGE = point("L1 Incisal Edge", None, "Incisal edge of lower incisor")
Pt = point(
    "Pt",
    "Pterygomaxillary",
    "Intersection of the inferior border of the foramen rotundum "
    "with the posterior wall of the pterygomaxillary fissure",
)
PM = point("PM", "Protuberance menti", "Protuberance menti or supragonion")

# Lines

FH = line(Po, Or, "Frankfort horizontal plane", "FH")
SN = line(S, N, "S-N line", "SN")
MP = line(Go, Me, "Mandibular plane", "MP")
SPP = line(ANS, PNS, "Palatal plane", "SPP")
NPog = line(N, Pog, "Facial plane", "N-Pog")
dentalPlane = line(A, Pog, "Dental plane", "A-Pog")
U1Axis = line(U1_INCISAL_EDGE, U1_APEX, "Long axis of upper incisor", "U1 Axis")
L1Axis = line(L1_INCISAL_EDGE, L1_APEX, "Long axis of lower incisor", "L1 Axis")


def _angle_magnitude(bundle: CalculationInput) -> Optional[float]:
    if not isinstance(bundle.self_object, GeoAngle):
        return None
    return abs(radians_to_degrees(calculate_angle(bundle.self_object)))


def _calculate_anb(bundle: CalculationInput) -> Optional[float]:
    line_na, line_nb = bundle.component_objects
    if not isinstance(line_na, GeoVector) or not isinstance(line_nb, GeoVector):
        return None
    _, a = get_vector_points(line_na)
    magnitude = _angle_magnitude(bundle)
    if magnitude is None:
        return None
    if is_behind(a, line_nb):
        return -magnitude
    return magnitude


def _interpret_anb(
    value: float,
    min: Optional[float],
    max: Optional[float],
    mean: Optional[float],
) -> List[LandmarkInterpretation]:
    if 0 < value < 2:
        return [
            LandmarkInterpretation(
                category="skeletalPattern",
                indication="tendency_for_class3",
                severity="none",
                value=value,
                min=min,
                max=max,
                mean=mean,
            )
        ]
    # A missing or zero minimum falls back to the textbook 2..4 range.
    return default_interpret_landmark("skeletalPattern", ("class3", "class1", "class2"))(
        value, min or 2, max or 4, 2
    )


def _calculate_convexity(bundle: CalculationInput) -> Optional[float]:
    an, pog_a = bundle.component_objects
    if not isinstance(an, GeoVector) or not isinstance(pog_a, GeoVector):
        return None
    pog, a = get_vector_points(pog_a)
    _, n = get_vector_points(an)
    n_pog = create_vector_from_points(n, pog)
    magnitude = _angle_magnitude(bundle)
    if magnitude is None:
        return None
    if is_behind(a, n_pog):
        return -magnitude
    return magnitude


def _calculate_ab_plane(bundle: CalculationInput) -> Optional[float]:
    line_ba, line_pog_n = bundle.component_objects
    if not isinstance(line_ba, GeoVector) or not isinstance(line_pog_n, GeoVector):
        return None
    _, a = get_vector_points(line_ba)
    magnitude = _angle_magnitude(bundle)
    if magnitude is None:
        return None
    if not is_behind(a, line_pog_n):
        return -magnitude
    return magnitude


# Angles

SNA = replace(
    angle_between_points(S, N, A),
    interpret=default_interpret_landmark("maxilla", ("retrognathic", "normal", "prognathic")),
)

SNB = replace(
    angle_between_points(S, N, B),
    interpret=default_interpret_landmark("mandible", ("retrognathic", "normal", "prognathic")),
)

ANB = replace(
    angle_between_lines(line(N, A), line(N, B)),
    calculator=_calculate_anb,
    interpret=_interpret_anb,
)

FMPA = replace(
    angle_between_lines(FH, MP, "Frankfort Mandibular Plane Angle", "FMPA"),
    interpret=default_interpret_landmark(
        "mandibularRotation", ("counterclockwise", "normal", "clockwise")
    ),
)
FMA = FMPA

SN_MP = angle_between_lines(SN, MP, "SN-MP", "SN-MP")

NSAr = angle_between_points(N, S, Ar, "Saddle Angle")
SArGo = angle_between_points(S, Ar, Go, "Articular Angle")
ArGoMe = angle_between_points(Ar, Go, Me, "Gonial Angle")

MM = replace(
    angle_between_lines(SPP, MP, None, "MM"),
    interpret=default_interpret_landmark("skeletalBite", ("closed", "normal", "open")),
)

U1_SN = replace(
    angle_between_lines(line(N, S), U1Axis, None, "U1-SN"),
    interpret=default_interpret_landmark(
        "upperIncisorInclination", ("palatal", "normal", "labial")
    ),
)

IMPA = replace(
    angle_between_lines(line(Me, Go), L1Axis, "Incisor Mandibular Plane Angle", "IMPA"),
    interpret=default_interpret_landmark(
        "lowerIncisorInclination", ("lingual", "normal", "labial")
    ),
)
L1_MP = IMPA

interincisalAngle = angle_between_lines(
    flip_vector(U1Axis), flip_vector(L1Axis), "Interincisal Angle", "U1-L1"
)

FMIA = angle_between_lines(FH, L1Axis, "Frankfort-mandibular incisor angle", "FMIA")

yAxis = replace(
    angle_between_lines(line(S, Gn), FH, "Y Axis-FH Angle", "Y-FH Angle"),
    interpret=default_interpret_landmark("growthPattern", ("horizontal", "normal", "vertical")),
)

downsAngleOfConvexity = replace(
    angle_between_lines(line(A, N), flip_vector(dentalPlane), "Angle of Convexity", "NAPog"),
    calculator=_calculate_convexity,
    interpret=default_interpret_landmark("skeletalProfile", ("concave", "normal", "convex")),
)

downsABPlaneAngle = replace(
    angle_between_lines(line(B, A), line(Pog, N), "A-B Plane Angle"),
    calculator=_calculate_ab_plane,
    interpret=default_interpret_landmark("skeletalPattern", ("class3", "class1", "class2")),
)

facialAngle = replace(
    angle_between_lines(flip_vector(FH), NPog, "Facial Angle"),
    interpret=compose_interpretation(
        default_interpret_landmark("skeletalProfile", ("concave", "normal", "convex")),
        default_interpret_landmark("chin", ("recessive", "normal", "prominent")),
    ),
)

L1ToDentalPlaneAngle = replace(
    angle_between_lines(L1Axis, flip_vector(dentalPlane)),
    interpret=default_interpret_landmark(
        "lowerIncisorInclination", ("lingual", "normal", "labial")
    ),
)

# Distances

L1_NB = distance(L1_INCISAL_EDGE, line(N, B), "Lower incisor to N-B", "L1-NB")
Pog_NB = distance(Pog, line(N, B), "Pogonion to N-B", "Pog-NB")

# Sums

bjorkSum = angular_sum([NSAr, SArGo, ArGoMe], "Björk Sum", "Björk Sum")


def _build_registry() -> Mapping[str, Landmark]:
    landmarks = [
        Ba, Po, Or, S, N, A, B, Pog, Gn, Ar, Go, Me, ANS, PNS,
        U1_APEX, U1_INCISAL_EDGE, L1_APEX, L1_INCISAL_EDGE, Pt, PM,
        FH, SN, MP, SPP, NPog, dentalPlane, U1Axis, L1Axis,
        SNA, SNB, ANB, FMPA, SN_MP, NSAr, SArGo, ArGoMe, MM, U1_SN, IMPA,
        interincisalAngle, FMIA, yAxis, downsAngleOfConvexity,
        downsABPlaneAngle, facialAngle, L1ToDentalPlaneAngle,
        L1_NB, Pog_NB, bjorkSum,
    ]
    table: Dict[str, Landmark] = {}
    for landmark in landmarks:
        if landmark.symbol in table:
            raise ValueError(f"duplicate landmark symbol {landmark.symbol!r}")
        table[landmark.symbol] = landmark
    return MappingProxyType(table)


REGISTRY: Mapping[str, Landmark] = _build_registry()


def get_landmark(symbol: str) -> Landmark:
    try:
        return REGISTRY[symbol]
    except KeyError:
        raise KeyError(f"unknown landmark symbol {symbol!r}") from None

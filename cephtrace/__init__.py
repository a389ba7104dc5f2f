from .geometry import (
    GeoAngle,
    GeoObject,
    GeoPoint,
    GeoVector,
    geo_object_from_dict,
)
from .landmarks import (
    CalculationInput,
    Landmark,
    LandmarkKind,
    angle_between_lines,
    angle_between_points,
    angular_sum,
    distance,
    flip_vector,
    is_step_automatic,
    is_step_computable,
    is_step_manual,
    line,
    point,
    reuse_for_image_type,
)
from .steps import are_equal_steps, are_equal_symbols, extract_steps, get_steps_for_analysis
from .evaluation import Evaluation, UnresolvedStep, evaluate, try_calculate, try_map
from .interpretation import (
    CategorizedResult,
    LandmarkInterpretation,
    compose_interpretation,
    default_interpret_landmark,
    get_display_name_for_category,
    get_display_name_for_indication,
    get_display_name_for_severity,
    index_results,
    interpret_analysis,
    resolve_indication,
    resolve_severity,
)
from .analyses import ANALYSES, Analysis, AnalysisComponent, get_analysis, get_name_for_analysis
from .definitions import REGISTRY, get_landmark
from .session import TracingSession
from .io import TracingFormatError, dump_tracing, load_tracing, load_tracing_file, load_workspace
from .config import EngineConfig, get_engine_config, set_engine_config

__all__ = [
    'GeoAngle',
    'GeoObject',
    'GeoPoint',
    'GeoVector',
    'geo_object_from_dict',
    'CalculationInput',
    'Landmark',
    'LandmarkKind',
    'angle_between_lines',
    'angle_between_points',
    'angular_sum',
    'distance',
    'flip_vector',
    'is_step_automatic',
    'is_step_computable',
    'is_step_manual',
    'line',
    'point',
    'reuse_for_image_type',
    'are_equal_steps',
    'are_equal_symbols',
    'extract_steps',
    'get_steps_for_analysis',
    'Evaluation',
    'UnresolvedStep',
    'evaluate',
    'try_calculate',
    'try_map',
    'CategorizedResult',
    'LandmarkInterpretation',
    'compose_interpretation',
    'default_interpret_landmark',
    'get_display_name_for_category',
    'get_display_name_for_indication',
    'get_display_name_for_severity',
    'index_results',
    'interpret_analysis',
    'resolve_indication',
    'resolve_severity',
    'ANALYSES',
    'Analysis',
    'AnalysisComponent',
    'get_analysis',
    'get_name_for_analysis',
    'REGISTRY',
    'get_landmark',
    'TracingSession',
    'TracingFormatError',
    'dump_tracing',
    'load_tracing',
    'load_tracing_file',
    'load_workspace',
    'EngineConfig',
    'get_engine_config',
    'set_engine_config',
]

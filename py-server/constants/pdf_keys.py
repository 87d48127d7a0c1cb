"""
PDF Dictionary Keys and Name Constants
"""

# Resource Dictionary Keys
KEY_RESOURCES = "/Resources"
KEY_XOBJECT = "/XObject"
KEY_EXT_GSTATE = "/ExtGState"
KEY_PATTERN = "/Pattern"
KEY_SHADING = "/Shading"
KEY_COLOR_SPACE = "/ColorSpace"
KEY_CONTENTS = "/Contents"

# Object Types and Subtypes
KEY_TYPE = "/Type"
KEY_SUBTYPE = "/Subtype"
VAL_IMAGE = "/Image"
VAL_FORM = "/Form"
VAL_XOBJECT = "/XObject"
VAL_PATTERN = "/Pattern"
VAL_EXT_GSTATE = "/ExtGState"

# Image / Form Properties
KEY_WIDTH = "/Width"
KEY_HEIGHT = "/Height"
KEY_MATRIX = "/Matrix"
KEY_BBOX = "/BBox"
KEY_BITS_PER_COMPONENT = "/BitsPerComponent"
KEY_FILTER = "/Filter"
VAL_FLATE_DECODE = "/FlateDecode"

# Color Spaces
VAL_DEVICE_GRAY = "/DeviceGray"
VAL_DEVICE_RGB = "/DeviceRGB"

# Graphics State Parameter Keys (ExtGState)
KEY_FILL_OPACITY = "/ca"         # Non-stroking alpha constant
KEY_STROKE_OPACITY = "/CA"       # Stroking alpha constant
KEY_BLEND_MODE = "/BM"           # Blend mode
KEY_SOFT_MASK = "/SMask"         # Soft mask

# Blend Modes
VAL_BM_NORMAL = "/Normal"
VAL_BM_COMPATIBLE = "/Compatible"
VAL_BM_EXCLUSION = "/Exclusion"

# Pattern and Shading Keys
KEY_PATTERN_TYPE = "/PatternType"
KEY_PAINT_TYPE = "/PaintType"
KEY_TILING_TYPE = "/TilingType"
KEY_X_STEP = "/XStep"
KEY_Y_STEP = "/YStep"
KEY_SHADING_TYPE = "/ShadingType"
KEY_COORDS = "/Coords"
KEY_EXTEND = "/Extend"
KEY_ANTI_ALIAS = "/AntiAlias"

# Function Keys
KEY_FUNCTION_TYPE = "/FunctionType"
KEY_DOMAIN = "/Domain"
KEY_ENCODE = "/Encode"
KEY_FUNCTION = "/Function"
KEY_FUNCTIONS = "/Functions"
KEY_BOUNDS = "/Bounds"
KEY_C0 = "/C0"
KEY_C1 = "/C1"
KEY_N = "/N"

# Numeric codes
SHADING_TYPE_AXIAL = 2
SHADING_TYPE_RADIAL = 3
FUNCTION_TYPE_EXPONENTIAL = 2
FUNCTION_TYPE_STITCHING = 3
PATTERN_TYPE_TILING = 1
PAINT_TYPE_COLORED = 1

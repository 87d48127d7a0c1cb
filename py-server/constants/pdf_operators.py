"""
PDF Operator Constants

Centralized definitions of the PDF content stream operators emitted by the
paint translation layer. Organized by functional category according to PDF
specification.

Reference: PDF 32000-1:2008 specification, Appendix A
"""

# ==============================================================================
# Graphics State Operators (PDF spec 8.4.4)
# ==============================================================================
OP_SAVE_STATE = b'q'                 # Save graphics state
OP_RESTORE_STATE = b'Q'              # Restore graphics state
OP_CTM = b'cm'                       # Modify current transformation matrix
OP_SET_GRAPHICS_STATE_PARAMS = b'gs' # Set parameters from graphics state parameter dict

# ==============================================================================
# Color Operators (PDF spec 8.6.8)
# ==============================================================================
# Stroke
OP_SET_GRAY_STROKE = b'G'            # Set Gray color for stroking
OP_SET_RGB_COLOR_STROKE = b'RG'      # Set RGB color for stroking
OP_SET_CMYK_COLOR_STROKE = b'K'      # Set CMYK color for stroking
OP_SET_COLOR_STROKE_N = b'SCN'       # Set color for stroking (general + name)
OP_SET_COLOR_SPACE_STROKE = b'CS'    # Set color space for stroking

# Fill (Non-Stroke)
OP_SET_GRAY_FILL = b'g'              # Set Gray color for non-stroking
OP_SET_RGB_COLOR_FILL = b'rg'        # Set RGB color for non-stroking
OP_SET_CMYK_COLOR_FILL = b'k'        # Set CMYK color for non-stroking
OP_SET_COLOR_FILL_N = b'scn'         # Set color for non-stroking (general + name)
OP_SET_COLOR_SPACE_FILL = b'cs'      # Set color space for non-stroking

# Device color spaces with a dedicated operator pair (stroke, fill)
DEVICE_COLOR_OPS = {
    '/DeviceGray': (OP_SET_GRAY_STROKE, OP_SET_GRAY_FILL),
    '/DeviceRGB': (OP_SET_RGB_COLOR_STROKE, OP_SET_RGB_COLOR_FILL),
    '/DeviceCMYK': (OP_SET_CMYK_COLOR_STROKE, OP_SET_CMYK_COLOR_FILL),
}

# ==============================================================================
# XObject Operators (PDF spec 8.8)
# ==============================================================================
OP_DO_XOBJECT = b'Do'     # Invoke named XObject (image, form, etc.)

# ==============================================================================
# Path Construction Operators (PDF spec 8.5.2)
# ==============================================================================
OP_MOVE_TO = b'm'         # Begin new subpath
OP_LINE_TO = b'l'         # Append straight line segment
OP_CLOSE_PATH = b'h'      # Close current subpath
OP_RECTANGLE = b're'      # Append rectangle

# ==============================================================================
# Path Painting Operators (PDF spec 8.5.3)
# ==============================================================================
OP_FILL = b'f'
OP_END_PATH = b'n'

# ==============================================================================
# Clipping Path Operators (PDF spec 8.5.4)
# ==============================================================================
OP_CLIP = b'W'            # Set clipping path using nonzero winding number rule

# ==============================================================================
# Shading Operators (PDF spec 8.7.4)
# ==============================================================================
OP_SHADING = b'sh'    # Paint area with shading pattern

APP_NAME            = "rs_bag2image"
APP_VERSION         = "1.0.0"
DEBUG_MODE          = False             # True = logs a nivel DEBUG
LOG_FORMAT          = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# ==============================================================================
# INPUT
# ==============================================================================

BAG_EXTENSION       = ".bag"            # extensión de las grabaciones RealSense

# ==============================================================================
# OUTPUT
# ==============================================================================
#
# Layout:
#   <bag parent>/<bag stem>/Color/000042.jpg
#   <bag parent>/<bag stem>/Depth/000042.png
#   <bag parent>/<bag stem>/Infrared/000042.jpg
#   <bag parent>/<bag stem>/Infrared 2/000042.jpg
#
# ==============================================================================

FRAME_NUMBER_DIGITS = 6                 # 000042
LOSSY_EXTENSION     = ".jpg"            # color / infrared
LOSSLESS_EXTENSION  = ".png"            # depth (16 bit crudo o 8 bit escalado)
JPEG_QUALITY        = 95                # calidad por defecto [0-100]
JPEG_QUALITY_MIN    = 0
JPEG_QUALITY_MAX    = 100

# ==============================================================================
# DEPTH VISUALIZATION
# ==============================================================================
#
# 0 mm -> 255 (blanco, cerca), DEPTH_DISPLAY_RANGE_MM -> 0 (negro, lejos)
#
# ==============================================================================

DEPTH_DISPLAY_RANGE_MM = 10000.0

# ==============================================================================
# PREVIEW
# ==============================================================================

QUIT_KEY            = 'q'               # tecla para terminar la conversión
PREVIEW_WAIT_MS     = 1                 # espera de cv2.waitKey por iteración

# Infrared slots tracked per bundle (left / right imager)
INFRARED_SLOTS      = 2

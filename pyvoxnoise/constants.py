"""
Global constants for PyVoxNoise.

Numerical parameters shared by the noise primitives, the channel evaluator
and the volume grid. Changing any of them changes every generated volume.

Author: B.G.
"""

import numpy as np

# Storage type of the voxel buffer
BYTE_TYPE_NP = np.uint8

# Float type used for positions and noise values
FLOAT_TYPE_NP = np.float64

# Hash arithmetic type (all mixing happens modulo 2**32)
HASH_TYPE_NP = np.uint32
UINT32_MAX = 0xFFFFFFFF

# Replaces a zero seed state, which mix32 maps to itself
SEED_ZERO_STATE = 0x9E3779B9

# lowbias32 mixer constants
MIX32_MULT_A = 0x7FEB352D
MIX32_MULT_B = 0x846CA68B

# float -> byte quantization: floor(clamp(v, 0, 1) * UNORM_SCALE)
UNORM_SCALE = 255.99

# Gradient noise seed embedding: w = SEED_W_MULTIPLIER * (seed % SEED_W_MODULUS)
SEED_W_MULTIPLIER = 1.618033
SEED_W_MODULUS = 1000

# Central difference step of the curl noise
CURL_STEP = 1e-3

# Smallest exponent accepted by the power curve post-processing
POWER_CURVE_EPSILON = 1e-6

# Tiled noise bytes are divided by this value
TILED_NOISE_DIVISOR = 256.0

# Volume layout
MAX_CHANNELS = 4
SPATIAL_DIMS = 3

# Default location of pre-tiled noise slices, formatted with res and slice index
TILED_NOISE_PATH_TEMPLATE = "{res}_{res}_{res}/LDR_RGBA_{index}.png"
TILED_NOISE_DEFAULT_ROOT = "input/blueNoiseTextures"

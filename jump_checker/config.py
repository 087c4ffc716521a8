# config.py
GRAVITY_STRENGTH = 0.5  # world units / tick^2, pointing down
JUMP_V_MAX = 8.0        # max launch speed (world units / tick)

# Agent body radius used to thicken the swept arc
AGENT_RADIUS = 10.0

# Arc is cut into this many equal time steps for the sweep
ARC_SEGMENTS = 10

# Cross products below this count as parallel segments
PARALLEL_EPS = 1e-9

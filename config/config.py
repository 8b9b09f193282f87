CONFIG = {
    # Physics settings (normalized screen units, one step per frame)
    'gravity': 0.00015,            # lowered gravity for a floatier feel
    'ball_radius': 0.04,
    'hand_radius': 0.1,            # catch radius drawn around the palm
    # more negative means the hand must move UP faster to throw
    'throw_threshold': -0.08,
    'throw_cooldown': 0.4,         # seconds between throws of the same hand
    'throw_damping': 0.25,         # share of hand velocity handed to the ball
    'throw_pop': 0.005,            # extra upward kick on release
    'throw_vx_jitter': 0.005,      # random horizontal kick on release
    'max_stack_height': 4,         # deeper stack slots overlap
    'stack_base_offset': 0.05,     # first held ball sits this far above the palm
    'stack_spacing': 1.2,          # slot spacing, in ball radii
    'wall_restitution': 0.8,
    'catch_ellipse_factor': 0.75,  # vertical distance weight for catching
    'catch_max_upward_velocity': -0.01,
    'respawn_floor': 1.2,          # below the visible area, with margin

    # Spawning
    'spawn_x_range': (0.2, 0.8),
    'spawn_y': -0.1,
    'respawn_y': -0.2,             # start higher up after falling off
    'spawn_vx_jitter': 0.005,      # total width of the random horizontal kick
    'spawn_interval': 0.5,         # seconds between spawns

    # Game settings
    'min_balls': 1,
    'max_balls': 15,
    'default_ball_count': 3,
    'score_per_throw': 10,

    # Ball colors (BGR: OpenCV format)
    'ball_colors': [
        (92, 92, 235),
        (92, 190, 235),
        (92, 235, 141),
        (235, 190, 92),
        (235, 92, 141),
        (190, 92, 235),
        (92, 235, 235),
        (141, 92, 235)
    ],

    # Visual settings (BGR)
    'left_hand_color': (246, 130, 59),    # blue
    'right_hand_color': (68, 68, 239),    # red
    'overlay_transparency': 0.8,
    'held_highlight_alpha': 0.3,

    # Sound settings
    'enable_sounds': True,
    'sound_files': {
        'catch': 'sounds/catch.wav',
        'throw': 'sounds/throw.wav',
        'drop': 'sounds/drop.wav'
    },

    # Coach settings
    'coach': {
        'enabled': True,
        'greeting': "Hi! I'm Coach Joe. Ready to juggle? Ask me for tips!",
        'instruction': (
            "You are an energetic, encouraging, and brief Juggling Coach named \"Juggler Joe\". "
            "You help a player of a virtual juggling game who uses their webcam-tracked hands "
            "to catch and throw virtual balls. "
            "Keep advice very short (under 2 sentences). "
            "Be enthusiastic and use emojis like 🤹, 🔥, ✨. "
            "Explain concepts like the cascade pattern, the scooping motion and height control simply. "
            "If the player says they dropped a ball, tell them it is part of learning."
        ),
        'tip_prompt': "Give me one quick juggling tip.",
        'missing_backend_reply': "API Key missing. Cannot connect to Coach.",
        'error_reply': "Oops, I dropped my train of thought. Try again!",
        'empty_reply': "Keep it up!",
        'max_history': 50
    },

    # Camera settings
    'camera_index': 0,
    'camera_width': 640,
    'camera_height': 480,
    'camera_fps': 30,

    # MediaPipe Hands configuration
    'hands_config': {
        'max_num_hands': 2,
        'model_complexity': 1,
        'min_detection_confidence': 0.5,
        'min_tracking_confidence': 0.5
    },

    # Performance settings
    'fps': 60,
}

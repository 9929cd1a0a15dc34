"""
Balloon Catcher
===============

Falling-balloon arcade game. The simulation core lives in
balloon_catcher.core and has no pygame dependency; pygame is only used
by the renderer, audio manager and pointer input adapters.

All tunable parameters are in game_config.yaml.
"""

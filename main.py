# main.py
"""
Main entry point for the procedural sky.

This script orchestrates the entire lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Builds the one-time scenery (stars, moon texture) and the simulation.
4. Runs the fixed-rate frame loop.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import cProfile
import pstats
import io

def should_log(frame: int, throttle: int) -> bool:
    """True on frames that fall on the log throttle. A throttle of 0 disables loop logging."""
    return bool(throttle) and frame % throttle == 0

def main():
    """
    The main function to run the sky.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Sky Simulation Starting ---")

    sim_params = config.get('simulation_parameters', {})
    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    from celestial import StarField, MoonTexture
    from simulation import Simulation
    from visualization import Visualizer
    from constants import FPS

    # --- Initialization phase: scenery is built once and never changes ---
    # A size mismatch raises ValueError here and aborts startup.
    stars = StarField(sim_params)
    moon = MoonTexture(sim_params['seed'])

    sim = Simulation(stars, moon, sim_params)
    visualizer = Visualizer(stars, moon, fps=vis_params.get('fps', FPS))

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    log_throttle = run_params.get('log_throttle_steps', 600)
    # 0 runs until the window is closed.
    max_steps = run_params.get('max_steps', 0)

    running = True
    if profiler:
        profiler.enable()
    while running:
        state = sim.step()

        if not visualizer.draw(state, sim):
            running = False

        # Rule 2.4: Hot loops must throttle logs
        if should_log(sim.frame, log_throttle):
            logging.info(f"Frame {sim.frame} | sun set: {state.has_set}")
            logging.debug(
                f"Frame {sim.frame} | Cloud cover: {state.density.mean():.4f} | "
                f"Darken factor: {state.darken_factor:.3f}"
            )

        if max_steps and sim.frame >= max_steps:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
            running = False

    visualizer.close()
    logging.info("Frame loop finished.")

    if profiler:
        profiler.disable()
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20) # Print top 20 slowest functions
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Sky Simulation Shutting Down ---")


if __name__ == "__main__":
    main()

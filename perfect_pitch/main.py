import logging
import threading
import time

from perfect_pitch.core.config import DEFAULT_CONFIG
from perfect_pitch.core.pitch_engine import PitchEngine
from perfect_pitch.input.channels import ReportChannel, SampleChannel
from perfect_pitch.input.mic_listener import MicListener
from perfect_pitch.ui.tuner_display import TunerDisplay

REFRESH_SECONDS = 1.0 / 30.0

logger = logging.getLogger(__name__)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    samples = SampleChannel()
    reports = ReportChannel()
    listener = MicListener(samples)
    sample_rate = listener.start()

    engine = PitchEngine(sample_rate, samples, reports, config=DEFAULT_CONFIG)
    engine_thread = threading.Thread(target=engine.run, name="pitch-engine", daemon=True)
    engine_thread.start()

    display = TunerDisplay(DEFAULT_CONFIG)
    last_line = None
    try:
        while engine_thread.is_alive():
            if not listener.is_active():
                logger.error("Input stream stopped unexpectedly")
                break
            display.tick(reports)
            line = display.render_text()
            if line != last_line:
                print(line)
                last_line = line
            time.sleep(REFRESH_SECONDS)
        else:
            logger.error("Pitch engine exited: %s", engine.stop_reason)
    except KeyboardInterrupt:
        pass
    finally:
        reports.close()
        listener.stop()
        engine_thread.join(timeout=1.0)


if __name__ == "__main__":
    main()

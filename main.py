#!/usr/bin/env python3
"""
SpeedWarn - curve speed advisory from live GPS.

Reads fixes from a serial NMEA receiver (or the built-in simulator), finds
the nearest known curve in the reference database and prints the current
speed, the curve's safe speed and a warning when it is exceeded.
"""

import argparse
import logging
import sys

import config
from speedwarn.dataset import CurveDatabase
from speedwarn.gps import GPSReader
from speedwarn.models import Advisory
from speedwarn.pipeline import AdvisoryPipeline
from speedwarn.readout import format_advisory, idle_readout
from speedwarn.session import SessionState, run
from speedwarn.simulator import GPSSimulator

logger = logging.getLogger('speedwarn.main')


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="SpeedWarn - curve speed advisory from live GPS"
    )
    parser.add_argument(
        "--dataset",
        default=config.DATASET_SOURCE,
        help="Path or http(s) URL of the curve database JSON",
    )
    parser.add_argument(
        "--port",
        default=config.GPS_SERIAL_PORT,
        help="GPS serial port",
    )
    parser.add_argument(
        "--baud",
        type=int,
        default=config.GPS_BAUD_RATE,
        help="GPS serial baud rate",
    )
    parser.add_argument(
        "--simulate",
        nargs=3,
        type=float,
        metavar=("LAT", "LON", "HEADING"),
        help="Use simulated GPS starting at LAT LON on HEADING",
    )
    parser.add_argument(
        "--sim-speed",
        type=float,
        default=config.SIMULATOR_DEFAULT_SPEED_MPS,
        help="Simulated speed in m/s",
    )
    parser.add_argument(
        "--units",
        choices=sorted(config.READOUT_LABELS),
        default=config.READOUT_UNIT,
        help="Readout unit",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=config.SESSION_POLL_INTERVAL_S,
        help="Seconds between position polls",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def print_readout(lines):
    for key in ('speed', 'location', 'radius', 'safe_speed', 'design_speed', 'warning'):
        if lines[key]:
            print(lines[key])
    print()


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    if args.simulate:
        lat, lon, heading = args.simulate
        source = GPSSimulator(lat, lon, heading, speed_mps=args.sim_speed)
    else:
        source = GPSReader(args.port, args.baud)

    database = CurveDatabase(args.dataset)
    database.load_async()
    pipeline = AdvisoryPipeline(database, block_on_load=False)
    state = SessionState(source=source, readout_unit=args.units)

    def on_advisory(advisory: Advisory):
        print_readout(format_advisory(advisory, state.readout_unit))

    print(f"SpeedWarn {config.APP_VERSION} starting...")
    print_readout(idle_readout(args.units))
    try:
        run(state, pipeline, interval=args.interval, on_advisory=on_advisory)
    except OSError as e:
        # Serial port missing or busy
        logger.error("Could not start session: %s", e)
        return 1
    print_readout(idle_readout(args.units))
    return 0


if __name__ == "__main__":
    sys.exit(main())

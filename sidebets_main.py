"""
Main application for the golf side-bet settlement system.
"""

import logging
import sys

from config.config_manager import ConfigManager
from feeds.score_feed import ScoreFeed
from history.score_history import ScoreHistory
from reports.report_generator import ReportGenerator
from settlement.round_processor import RoundProcessor

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main(config_file: str = "config.yaml", scores_file: str = None) -> None:
    """Main application entry point."""
    try:
        logger.info("Starting side-bet settlement...")

        config = ConfigManager.load_config(config_file)
        setup = ConfigManager.build_round_setup(config)
        logger.info(f"Round {setup.round_id}: {len(setup.roster)} players, "
                    f"{len(setup.pairings)} matches, {setup.total_holes} holes")

        feed_config = config.get('feed') or {}
        feed = ScoreFeed(feed_config.get('base_url'), feed_config.get('timeout', 30))
        if scores_file:
            scores = feed.load_scores_from_csv(scores_file, setup.round_id)
        else:
            scores = feed.fetch_scores(setup.round_id)

        history = ScoreHistory()
        history.record_all(scores)
        logger.info(f"Score history holds {len(history)} facts")

        processor = RoundProcessor(setup, history)
        report = processor.settle()

        output_dir = (config.get('reports') or {}).get('output_dir', 'reports')
        report_generator = ReportGenerator(report, setup.total_holes)
        report_results = report_generator.generate_all_reports(output_dir)
        logger.info(f"Generated reports: {report_results}")

        for line in report_generator.summary_lines():
            logger.info(line)

        logger.info("Side-bet settlement completed successfully")

    except Exception as e:
        logger.error(f"Error in side-bet settlement: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    config_file = sys.argv[1] if len(sys.argv) > 1 else "config.yaml"
    scores_file = sys.argv[2] if len(sys.argv) > 2 else None
    main(config_file, scores_file)

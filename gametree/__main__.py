from gametree.interface.cli import main
from gametree.config import CONFIG, configure_logging

configure_logging(CONFIG)
main()

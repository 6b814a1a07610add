from . import argh_parser
from .legacy import LegacyPipeline
from .somatic import SomaticPipeline


def main():
    """main entry point for this project"""
    parser = argh_parser.CustomArghParser()
    parser.add_argument(
        "-v",
        "--verbose",
        help="Verbose logging",
        action="store_const",
        dest="loglevel",
        const="INFO",
        default="WARNING",
    )
    parser.add_argument(
        "-d",
        "--debug",
        help="Print debugging info",
        action="store_const",
        dest="loglevel",
        const="DEBUG",
    )
    subparsers = parser.add_subparsers(required=True)

    # Tumor/normal or tumor-only parser
    pipeline = SomaticPipeline()
    somatic_subparser = subparsers.add_parser("somatic")
    pipeline.add_arguments(somatic_subparser)
    somatic_subparser.set_defaults(pipeline=pipeline.main)

    # Combined pileup parser
    pipeline = LegacyPipeline()
    legacy_subparser = subparsers.add_parser("legacy")
    pipeline.add_arguments(legacy_subparser)
    legacy_subparser.set_defaults(pipeline=pipeline.main)

    args = parser.parse_args()
    args.pipeline(args)


if __name__ == "__main__":
    main()

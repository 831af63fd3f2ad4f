"""Adaptor for the CLI driving actor.

Commands acting on behalf of an operator take their credentials as
arguments, prompting for the password if it is not given, and log in
before doing anything else. The resulting `entities.Session` lives only
for the duration of the command.
"""

import argparse
import getpass
import logging
from collections.abc import Sequence

from returns.result import Failure, ResultE, Success

from climate_monitoring.internal import config, entities, ports, services

log = logging.getLogger("climate-monitoring")

NOT_AVAILABLE = "N/A"
COMMENT_SEPARATOR = " / "


def render_summary(city: entities.City, summary: entities.WeatherSummary) -> str:
    """Render the observed conditions of a city as a table of lines."""
    lines = [str(city)]
    for row in summary.categories():
        avg = NOT_AVAILABLE if row.avg_score is None else str(row.avg_score)
        lines.append(
            f"  {row.category.label:<18} avg {avg:>3} ({row.record_count} scored)"
            + (f" | {COMMENT_SEPARATOR.join(row.comments)}" if row.comments else ""),
        )
    return "\n".join(lines)


class CLIHandler:
    """CLI driving actor."""

    store_adaptor: type[ports.RecordStore]

    def __init__(self, store_adaptor: type[ports.RecordStore]) -> None:
        """Create a new instance."""
        self.store_adaptor = store_adaptor

    @staticmethod
    def _add_credentials(command: argparse.ArgumentParser) -> None:
        command.add_argument("--username", "-u", help="Operator username", required=True)
        command.add_argument(
            "--password",
            "-p",
            help="Operator password. Omit to be prompted for it.",
            required=False,
        )

    @property
    def parser(self) -> argparse.ArgumentParser:
        """Return the CLI argument parser."""
        parser = argparse.ArgumentParser(description="Climate Monitoring CLI")
        subparsers = parser.add_subparsers(dest="command")

        register_command = subparsers.add_parser("register", help="Register a new operator")
        register_command.add_argument("--name-surname", help="Full name", required=True)
        register_command.add_argument("--tax-code", help="16 character fiscal code", required=True)
        register_command.add_argument("--email", help="Email address", required=True)
        self._add_credentials(register_command)
        register_command.add_argument(
            "--center-id",
            help="Id of an existing center to join",
            type=int,
            required=False,
        )

        login_command = subparsers.add_parser("login", help="Check operator credentials")
        self._add_credentials(login_command)

        subparsers.add_parser("env", help="Show the environment variables the app reads")

        subparsers.add_parser("centers", help="List monitoring centers")

        center_command = subparsers.add_parser(
            "create-center",
            help="Open a new monitoring center and join it",
        )
        self._add_credentials(center_command)
        center_command.add_argument("--name", help="Center name", required=True)
        center_command.add_argument("--street", required=True)
        center_command.add_argument("--street-number", required=True)
        center_command.add_argument("--postal-code", required=True)
        center_command.add_argument("--town", required=True)
        center_command.add_argument("--district", required=True)
        center_command.add_argument(
            "--city-id",
            help="Id of a city monitored by the center. Repeat for several cities.",
            type=int,
            action="append",
            dest="city_ids",
            required=True,
        )

        associate_command = subparsers.add_parser(
            "associate",
            help="Join an existing monitoring center",
        )
        self._add_credentials(associate_command)
        associate_command.add_argument("--center-id", type=int, required=True)

        data_command = subparsers.add_parser(
            "add-data",
            help="Record observations for a city",
        )
        self._add_credentials(data_command)
        data_command.add_argument("--city-id", type=int, required=True)
        data_command.add_argument(
            "--date",
            help="Day of the observations (DD/MM/YYYY)",
            required=True,
        )
        for category in entities.Category:
            flag = category.value.replace("_", "-")
            data_command.add_argument(
                f"--{flag}",
                help=f"{category.label} score "
                f"({entities.MIN_SCORE}-{entities.MAX_SCORE})",
                type=int,
                dest=f"{category.value}_score",
                required=False,
            )
            data_command.add_argument(
                f"--{flag}-comment",
                help=f"Notes on the {category.label.lower()}",
                dest=f"{category.value}_comment",
                required=False,
            )

        search_command = subparsers.add_parser("search", help="Find monitored cities")
        search_options = search_command.add_mutually_exclusive_group(required=True)
        search_options.add_argument("--name", help="City name, in any case")
        search_options.add_argument("--country", help="Two letter country code")
        search_options.add_argument(
            "--coordinates",
            help="Exact latitude and longitude",
            type=float,
            nargs=2,
            metavar=("LAT", "LON"),
        )

        show_command = subparsers.add_parser("show", help="Show observed conditions of a city")
        show_command.add_argument("--city-id", type=int, required=True)

        return parser

    @staticmethod
    def _authenticate(
        operator_service: ports.OperatorUseCase,
        args: argparse.Namespace,
    ) -> ResultE[entities.Session]:
        """Log in with the credentials given on the command line."""
        password: str = args.password if args.password is not None else getpass.getpass()
        login_result = operator_service.perform_login(args.username, password)
        if isinstance(login_result, Failure):
            return login_result
        operator = login_result.unwrap()
        if operator is None:
            return Failure(entities.InvalidInputError(
                field="credentials",
                reason="unknown username or wrong password",
            ))
        session = entities.Session()
        session.login(operator)
        return Success(session)

    def run(self, argv: Sequence[str] | None = None) -> int:
        """Run the CLI handler.

        Returns the appropriate exit code.
        """
        args = self.parser.parse_args(argv)
        if args.command is None:
            self.parser.print_help()
            return 1

        if args.command == "env":
            config.StoreEnv.print_env()
            return 0

        store_result = self.store_adaptor.connect()
        if isinstance(store_result, Failure):
            log.error(f"Failed to connect to record store: {store_result!s}")
            return 1
        store = store_result.unwrap()
        operator_service = services.OperatorService(operator_repository=store)
        center_service = services.CenterService.from_store(store)
        city_service = services.CityService.from_store(store)

        result: ResultE[object]
        match args.command:
            case "register":
                password = args.password if args.password is not None else getpass.getpass()
                result = operator_service.perform_registration(
                    name_surname=args.name_surname,
                    tax_code=args.tax_code,
                    email=args.email,
                    username=args.username,
                    password=password,
                    center_id=args.center_id,
                ).map(lambda op: print(f"Registered {op}"))

            case "login":
                result = self._authenticate(operator_service, args).map(
                    lambda session: print(f"Logged in as {session.operator}"),
                )

            case "centers":
                result = center_service.list_centers().map(
                    lambda centers: print("\n".join(f"{c.id}\t{c}" for c in centers)),
                )

            case "create-center":
                result = self._authenticate(operator_service, args).bind(
                    lambda session: session.require_operator(),
                ).bind(
                    lambda operator: center_service.init_new_center(
                        center_name=args.name,
                        street=args.street,
                        street_number=args.street_number,
                        postal_code=args.postal_code,
                        town=args.town,
                        district=args.district,
                        city_ids=args.city_ids,
                        operator_id=operator.id,
                    ),
                ).map(lambda center: print(f"Created center {center.id}: {center}"))

            case "associate":
                session_result = self._authenticate(operator_service, args)
                if isinstance(session_result, Failure):
                    result = session_result
                else:
                    session = session_result.unwrap()

                    def _joined(operator: entities.Operator) -> None:
                        session.refresh(operator)
                        print(f"Joined center {operator.center_id} as {session.operator}")

                    result = session.require_operator().bind(
                        lambda operator: operator_service.associate_center(
                            operator_id=operator.id,
                            center_id=args.center_id,
                        ),
                    ).map(_joined)

            case "add-data":
                rows: list[ports.CategoryRow] = [
                    (getattr(args, f"{c.value}_score"), getattr(args, f"{c.value}_comment"))
                    for c in entities.Category
                ]
                result = self._authenticate(operator_service, args).bind(
                    lambda session: session.require_operator(),
                ).bind(
                    lambda operator: center_service.add_data_to_center(
                        city_id=args.city_id,
                        operator_id=operator.id,
                        date=args.date,
                        category_rows=rows,
                    ),
                ).map(lambda record: print(
                    f"Stored record {record.id} for city {record.city_id} "
                    f"on {record.display_date}",
                ))

            case "search":
                if args.name is not None:
                    cities_result = city_service.search_by_name(args.name)
                elif args.country is not None:
                    cities_result = city_service.search_by_country(args.country)
                else:
                    cities_result = city_service.search_by_coordinates(*args.coordinates)
                result = cities_result.map(
                    lambda cities: print("\n".join(f"{c.id}\t{c}" for c in cities)),
                )

            case "show":
                result = city_service.get_city(args.city_id).bind(
                    lambda city: city_service.weather_summary(city.id).map(
                        lambda summary: print(render_summary(city, summary)),
                    ),
                )

            case _:
                log.error(f"Unknown command: {args.command}")
                self.parser.print_help()
                return 1

        if isinstance(result, Failure):
            log.error(f"Failed to run '{args.command}': {result.failure()}")
            return 1

        return 0

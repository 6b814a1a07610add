import argh


class CustomArghParser(argh.ArghParser):
    """
    An argh parser that accepts hyphens or underscores in long options,
    e.g. `--dry-run` and `--dry_run`
    """

    def _parse_optional(self, arg_string):
        if (
            arg_string
            and len(arg_string) > 2
            and arg_string[0] in self.prefix_chars
            and arg_string[1] in self.prefix_chars
        ):
            # only the option name, not an attached `=value`
            option, sep, value = arg_string[2:].partition("=")
            arg_string = "--" + option.replace("-", "_") + sep + value
        return super()._parse_optional(arg_string)

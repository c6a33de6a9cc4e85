from dataclasses import dataclass

from rich.pretty import pprint

from cmdopt import *

__prog__ = "nova"


@dataclass
class Settings:
    config: str = "nova.json"
    input: str = ""
    output: str = ""


settings = Settings()

nova = Root("nova", "perform operations on a horizon node", target=settings)
nova.option("config", String(), "configuration file", bind="config")
nova.command("keypairs", "generate keypairs", lambda keypairs: (
    keypairs.option("output", String(), "output file", bind="output")
))
for token, descr in (
        ("create", "create accounts"),
        ("trust", "establish trustlines"),
        ("crust", "remove trustlines"),
        ("fund", "fund accounts"),
):
    nova.command(token, descr, lambda command: command.option("input", String(), "input file", bind="input"))
nova.command("whitelist", "manage the whitelist", lambda whitelist: (
    whitelist
    .command("add", "add a key to the whitelist", lambda add: add.parameter("public key"))
    .command("remove", "remove a key from the whitelist", lambda remove: remove.parameter("public key"))
    .command("reserve", "set the reserve percentage", lambda reserve: reserve.parameter("percentage", Int(0, 100)))
))
nova.command("data", "store data on an account", lambda data: (
    data
    .parameter("secret key")
    .parameter("key name")
))


if __name__ == '__main__':
    result = invoke(nova, fancy=True)
    pprint(result)
    pprint(settings)

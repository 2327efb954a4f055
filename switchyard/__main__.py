"""
Demo dispatcher: `python -m switchyard <command> [arguments]`.

Try
- python -m switchyard help
- python -m switchyard help -cmd greet
- python -m switchyard greet Ada -profile staging /loud
- python -m switchyard rep -times 3 -word hey -profile dev
"""
from .commands import command
from .dispatcher import Dispatcher, invoke


@command(descr="greet someone, shouting when /loud is on")
def greet(dispatcher):
    message = "hello %s (%s profile)" % (
        dispatcher.get_parameter_as_string("who"),
        dispatcher.get_parameter_as_string("profile"),
    )
    print(message.upper() if dispatcher.get_switch("loud") else message)


greet.configure_parameter("who", mandatory=True, descr="name to greet")
greet.configure_switch("loud")


@command(descr="print a word a number of times", aliases=("rep",))
def repeat(dispatcher):
    print(" ".join([dispatcher.get_parameter_as_string("word")] * dispatcher.get_parameter_as_int("times")))


repeat.configure_parameter("word", default="echo", descr="word to print")
repeat.configure_parameter("times", mandatory=True, descr="how many times")


def main():
    dispatcher = Dispatcher("switchyard", shell=True, fancy=True, colorful=True)
    dispatcher.configure_command(greet)
    dispatcher.configure_command(repeat)
    dispatcher.configure_global_parameter("profile", mandatory=True, descr="deployment profile")
    invoke(dispatcher)


if __name__ == '__main__':
    main()

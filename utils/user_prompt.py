POSITIVE_ANSWERS = {"si", "s", "yes", "y"}
NEGATIVE_ANSWERS = {"no", "n"}


def confirm(question: str, input_func=input) -> bool:
    """
    Asks the operator a yes/no question until a recognised answer is given.
    End of input counts as "no".
    """
    while True:
        try:
            answer = input_func(f"{question} (si/no): ")
        except EOFError:
            return False

        answer = answer.strip().lower()
        if answer in POSITIVE_ANSWERS:
            return True
        if answer in NEGATIVE_ANSWERS:
            return False

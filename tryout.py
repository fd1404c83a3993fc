from spancalc.errors import CalcError
from spancalc.resolver import resolve
from spancalc.session import Session
from spancalc.tokenizer import tokenize

session = Session()

for code in [
    "5 % ;",
    "% 1 + 1",
    "% (4 + 6 * 3)",
    "%((4+6) * 3)",
    "% (7/6/2000)",
    "a = 1; b= 2; c = a + b; % c",
    "var = (1 + 14 * (54*2)) %",
    "% 10 / 5/ 2",
    "a = b = 10; % a; % b",
    "% 1 / 0",
    ";;;",
    "x + 1",
    "(1 + 2",
    "2 + 3)",
    "1.2.3",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = list(tokenize(code, session.interner))
        print(f"tokens: {' '.join(str(t) for t in tokens)}")
        postfix = list(resolve(tokens))
        print(f"postfix: {' '.join(str(t.value) for t in postfix)}")
        print(f"output:{session.run_capturing(code)}")
    except CalcError as e:
        print(e.render(code))
        continue
    print(f"variables: {session.named_variables()}")

class Greeter:
    def hello(self, name: str) -> str:
        return f"Hello, {name}!"

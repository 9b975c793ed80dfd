from pydantic import BaseModel


class PhoneEntry(BaseModel):
    id: str = ""  # site-relative link path, e.g. "apple_iphone_15-12559.php"
    name: str = ""
    image: str = ""  # thumbnail URL


class Viewport(BaseModel):
    width: int
    height: int


class LaunchConfig(BaseModel):
    args: list[str]
    viewport: Viewport | None = None
    executable_path: str | None = None
    headless: bool = True

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter(tags=["auth"])

# Credentials are checked by the auth middleware in front of this service.
LOGIN_PAGE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <title>Log in | Invoice Dashboard</title>
  </head>
  <body>
    <main style="display:flex;min-height:100vh;align-items:center;justify-content:center;padding:1.5rem">
      <form style="width:100%;max-width:28rem">
        <h1>Please log in to continue.</h1>
        <label for="email">Email</label>
        <input id="email" type="email" name="email" placeholder="Enter your email address" required>
        <label for="password">Password</label>
        <input id="password" type="password" name="password" placeholder="Enter password" required minlength="6">
        <button type="submit">Log in</button>
      </form>
    </main>
  </body>
</html>
"""


@router.get("/login", response_class=HTMLResponse)
async def login_page():
    return HTMLResponse(LOGIN_PAGE)

from cdn77_client.main import app

app(prog_name="cdn77-client")

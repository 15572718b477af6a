from src.timesheet_payroll.timesheet_payroll.main import create_app

app = create_app()

if __name__ == "__main__":
    # The reloader would start a second copy of the job tickers.
    app.run(debug=app.config["DEBUG"], use_reloader=False)

"""Calculator web page served at the site root."""


def _base_html(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        :root {{
            --bg: #f5f6fb;
            --ink: #1f2333;
            --card: #ffffff;
            --line: #e3e6f0;
            --accent: #4f46e5;
            --gain: #059669;
            --loss: #dc2626;
            --muted: #6b7280;
        }}

        * {{
            margin: 0;
            padding: 0;
            box-sizing: border-box;
        }}

        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Helvetica, Arial, sans-serif;
            background: var(--bg);
            color: var(--ink);
            line-height: 1.5;
        }}

        .container {{
            width: min(760px, 94vw);
            margin: 40px auto;
        }}

        .card {{
            background: var(--card);
            border: 1px solid var(--line);
            border-radius: 16px;
            padding: 28px;
            box-shadow: 0 10px 30px rgba(31, 35, 51, 0.08);
        }}

        h1 {{
            font-size: 1.6rem;
            margin-bottom: 4px;
        }}

        .subtitle {{
            color: var(--muted);
            margin-bottom: 20px;
        }}

        form {{
            display: grid;
            grid-template-columns: repeat(3, 1fr);
            gap: 12px;
        }}

        label {{
            font-size: .85rem;
            color: var(--muted);
            display: flex;
            flex-direction: column;
            gap: 4px;
        }}

        input {{
            padding: 10px 12px;
            border: 1px solid var(--line);
            border-radius: 10px;
            font-size: 1rem;
        }}

        button {{
            grid-column: 1 / -1;
            padding: 12px;
            border: 0;
            border-radius: 10px;
            background: var(--accent);
            color: #fff;
            font-weight: 700;
            font-size: 1rem;
            cursor: pointer;
        }}

        button:disabled {{
            opacity: .6;
            cursor: wait;
        }}

        .error {{
            margin-top: 16px;
            color: var(--loss);
        }}

        .results {{
            margin-top: 24px;
            display: grid;
            grid-template-columns: repeat(2, 1fr);
            gap: 12px;
        }}

        .metric {{
            border: 1px solid var(--line);
            border-radius: 12px;
            padding: 12px 14px;
        }}

        .metric span {{
            display: block;
            font-size: .8rem;
            color: var(--muted);
        }}

        .metric strong {{
            font-size: 1.15rem;
        }}

        .gain {{ color: var(--gain); }}
        .loss {{ color: var(--loss); }}

        footer {{
            margin-top: 20px;
            font-size: .75rem;
            color: var(--muted);
            text-align: center;
        }}
    </style>
</head>
<body>
{body}
</body>
</html>"""


def render_calculator_page(api_path: str = "/api/stocks/calculate") -> str:
    """Form that posts to the calculate endpoint and renders the returned fields."""
    body = f"""
<div class="container">
    <div class="card">
        <h1>Investment Time Machine</h1>
        <p class="subtitle">What would a past investment be worth today?</p>
        <form id="calc-form">
            <label>Stock symbol
                <input name="symbol" placeholder="AAPL" required>
            </label>
            <label>Investment date
                <input name="date" type="date" required>
            </label>
            <label>Amount (USD)
                <input name="amount" type="number" min="0.01" step="0.01" placeholder="1000" required>
            </label>
            <button type="submit" id="submit-btn">Calculate returns</button>
        </form>
        <div class="error" id="error"></div>
        <div class="results" id="results"></div>
    </div>
    <footer>
        Market data provided by Yahoo Finance. For educational purposes only;
        past performance does not guarantee future results.
    </footer>
</div>
<script>
const currency = new Intl.NumberFormat("en-US", {{ style: "currency", currency: "USD" }});
const signed = (v) => `${{parseFloat(v) >= 0 ? "+" : ""}}${{v}}%`;
const tone = (v) => (parseFloat(v) >= 0 ? "gain" : "loss");

function metric(label, value, cls) {{
    return `<div class="metric"><span>${{label}}</span><strong class="${{cls || ""}}">${{value}}</strong></div>`;
}}

document.getElementById("calc-form").addEventListener("submit", async (event) => {{
    event.preventDefault();
    const form = event.target;
    const button = document.getElementById("submit-btn");
    const errorBox = document.getElementById("error");
    const results = document.getElementById("results");
    errorBox.textContent = "";
    results.innerHTML = "";
    button.disabled = true;

    try {{
        const response = await fetch("{api_path}", {{
            method: "POST",
            headers: {{ "Content-Type": "application/json" }},
            body: JSON.stringify({{
                symbol: form.symbol.value,
                date: form.date.value,
                amount: parseFloat(form.amount.value),
            }}),
        }});
        const data = await response.json();
        if (!response.ok) {{
            errorBox.textContent = data.error || `Server error: ${{response.status}}`;
            return;
        }}
        results.innerHTML = [
            metric("Symbol", data.symbol),
            metric("Invested on", data.investmentDate),
            metric("Amount invested", currency.format(data.originalAmount)),
            metric("Price then", currency.format(parseFloat(data.historicalPrice))),
            metric("Price now", currency.format(parseFloat(data.currentPrice))),
            metric("Shares purchased", data.sharesPurchased),
            metric("Current value", currency.format(parseFloat(data.currentValue))),
            metric("Total return", currency.format(parseFloat(data.totalReturn)), tone(data.totalReturn)),
            metric("Return", signed(data.returnPercentage), tone(data.returnPercentage)),
            metric("Annualized return", signed(data.annualizedReturn), tone(data.annualizedReturn)),
            metric("Years held", data.yearsHeld),
        ].join("");
    }} catch (err) {{
        errorBox.textContent = "Cannot connect to server. Please try again.";
    }} finally {{
        button.disabled = false;
    }}
}});
</script>
"""
    return _base_html("Investment Time Machine", body)

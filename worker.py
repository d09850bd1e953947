# worker.py
from prefect import serve
from retail_eda.pipeline import run_analysis_pipeline

if __name__ == "__main__":
    # On-demand analysis of a cleaned transaction table
    analysis = run_analysis_pipeline.to_deployment(
        name="retail-analysis",
        tags=["analysis", "manual"],
        description="Rolls transactions up into daily, weekly and monthly revenue and item series."
    )

    serve(analysis, limit=1, pause_on_shutdown=False)

from datetime import datetime
from airflow import DAG
from airflow.operators.python import PythonOperator

from src import ingest, normalize, filter_rows, categories, reviews, dedup, model, persist

DEFAULT_ARGS = {"owner": "data-eng", "retries": 0}

dag = DAG(
    dag_id="amazon_sales_star_schema",
    default_args=DEFAULT_ARGS,
    schedule=None,
    start_date=datetime(2025, 1, 1),
    catchup=False,
)

load = PythonOperator(
    task_id="load_raw",
    python_callable=ingest.run,
    dag=dag,
)

clean = PythonOperator(task_id="normalize_fields", python_callable=normalize.run, dag=dag)
keep = PythonOperator(task_id="filter_rows", python_callable=filter_rows.run, dag=dag)
split = PythonOperator(task_id="split_categories", python_callable=categories.run, dag=dag)
explode = PythonOperator(task_id="explode_reviews", python_callable=reviews.run, dag=dag)
dedup_reviews = PythonOperator(task_id="dedup_reviews", python_callable=dedup.run_reviews, dag=dag)
dedup_products = PythonOperator(task_id="dedup_products", python_callable=dedup.run_products, dag=dag)
build = PythonOperator(task_id="build_model", python_callable=model.run, dag=dag)
export = PythonOperator(task_id="export_analytics", python_callable=persist.export_analytics, dag=dag)

# DuckDB allows one writer process at a time, so the stages run strictly in sequence
load >> clean >> keep >> split >> explode >> dedup_reviews >> dedup_products >> build >> export

import os

from dotenv import load_dotenv

load_dotenv()



##### PATHS #####
CURRENT_FILE = os.path.abspath(__file__)

# Go up 3 levels: src/p01_country_similarity/config.py -> project root
PATH_PROJECT = os.path.dirname(
    os.path.dirname(
        os.path.dirname(CURRENT_FILE)
    )
)

PATH_DATA = os.environ.get("COUNTRY_SIMILARITY_DATA_DIR", f"{PATH_PROJECT}/data")
PATH_OUTPUT = f"{PATH_DATA}/output"

PATH_DATA_LIFE_EXPECTANCY = f"{PATH_DATA}/Life Expectancy Data.csv"
PATH_DATA_LIFE_EXPECTANCY_CLEAN = f"{PATH_OUTPUT}/life_expectancy_clean.csv"



### COLUMNS ###

# Life expectancy dataset (WHO / Kaggle)
COL_COUNTRY = "Country"
COL_YEAR = "Year"
COL_STATUS = "Status"
COL_LIFE_EXPECTANCY = "Life expectancy"
COL_ADULT_MORTALITY = "Adult Mortality"
COL_INFANT_DEATHS = "infant deaths"
COL_GDP = "GDP"
COL_POPULATION = "Population"
COL_INCOME_COMPOSITION = "Income composition of resources"
COL_SCHOOLING = "Schooling"

STATUS_DEVELOPED = "Developed"
STATUS_DEVELOPING = "Developing"

# 0-based data column positions in the life expectancy CSV
IDX_COUNTRY = 0
IDX_LIFE_EXPECTANCY = 3
IDX_GDP = 16
IDX_POPULATION = 17



### SIMILARITY GRAPH ###

DEFAULT_FEATURE_COLUMNS = [IDX_LIFE_EXPECTANCY, IDX_GDP, IDX_POPULATION]
DEFAULT_LABEL_COLUMN = IDX_COUNTRY
DEFAULT_THRESHOLD = float(os.environ.get("COUNTRY_SIMILARITY_THRESHOLD", 0.8))
DEFAULT_TOP_K = 5

EDGE_LIST_HEADER = ["Source", "Target", "Weight"]
NODE_TABLE_HEADER = ["Id", "Label", "Cluster", "Degree", "IsRepresentative"]
WEIGHT_DECIMALS = 6

FILE_EDGE_LIST = "graph_edge_list.csv"
FILE_NODE_TABLE = "graph_nodes.csv"
FILE_SUMMARY = "summary.json"
FILE_GRAPH_PLOT = "similarity_graph.png"



### CLEANING ###

# Placeholders used by the cleaning step for missing cells
DEFAULT_IMPUTE_VALUES = {
    COL_LIFE_EXPECTANCY: 65.0,
    COL_INCOME_COMPOSITION: 0.5,
    COL_GDP: 5000.0,
    COL_ADULT_MORTALITY: 0.0,
    COL_INFANT_DEATHS: 0.0,
    COL_SCHOOLING: 0.0,
}



### DESCRIPTIVE ANALYSIS ###

# Identifier columns left out of the correlation heatmap
CORRELATION_EXCLUDE = [COL_COUNTRY, COL_YEAR, COL_STATUS]
TOP_N_PER_YEAR = 5

# Health indicators compared between developed and developing countries
COMPARISON_FEATURES = ["Measles", "Polio", "BMI", "Diphtheria", "Hepatitis B", "HIV/AIDS"]
COMPARISON_STATUSES = [STATUS_DEVELOPED, STATUS_DEVELOPING]

FILE_CORRELATION_HEATMAP = "correlation_heatmap.png"
FILE_SCATTER = "scatter_plot.png"
FILE_DOUBLE_HISTOGRAM = "double_histogram.png"
FILE_STATUS_ADULT_MORTALITY = "developed_vs_developing_plot_adult_mortality.png"
FILE_STATUS_INFANT_DEATHS = "developed_vs_developing_plot_infant_mortality.png"
FILE_FEATURE_COMPARISON = "comparison_bar_plot.png"
FILE_DESCRIPTIVE_SUMMARY = "descriptive_summary.json"
